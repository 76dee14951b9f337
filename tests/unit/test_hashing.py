from utils.hashing import verify_password, hash_password


def test_password_hashing():
    password = "supersecretpassword"
    hashed = hash_password(password)
    assert hashed != password
    assert hashed.startswith("$2")

    # salted: same password, different hashes
    assert hash_password(password) != hashed


def test_password_verification():
    password = "supersecretpassword"
    hashed = hash_password(password)

    assert verify_password(password, hashed) is True
    assert verify_password("wrongpassword", hashed) is False

    long_pass = "a" * 100
    hashed_long = hash_password(long_pass)
    assert verify_password(long_pass, hashed_long) is True
