from pydantic import BaseModel


class ExportRequest(BaseModel):
    property_id: int
    # Empty exports every content item of the property
    content_ids: list[int] = []
    template: str = "professional"
