from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every record exchanged with the storefront client.

    Fields are snake_case in Python and camelCase on the wire; either
    spelling is accepted on input. from_attributes lets records be built
    straight from ORM rows.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )
