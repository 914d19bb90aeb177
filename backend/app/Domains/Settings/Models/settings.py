from pydantic import BaseModel, Field


class OfficeSettings(BaseModel):
    daily_limit: int = Field(20, ge=0)
