from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base for records kept in the document collections.

    Attributes are snake_case in Python; documents are stored and served
    with camelCase keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_document(self, exclude_unset: bool = False) -> dict:
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_unset=exclude_unset)
