from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class URLCreate(BaseModel):
    original: HttpUrl = Field(..., description="The original URL to be shortened")


class URLResponse(BaseModel):
    """Response schema for a shortened URL

    - from_attributes=True reads straight from a URLRecord
    - the record id stays internal and is not part of the response
    """
    original: str
    alias: str

    model_config = ConfigDict(from_attributes=True)
