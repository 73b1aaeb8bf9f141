from pydantic import BaseModel


class SubcontractorDeleteResponse(BaseModel):
    success: bool = True
    message: str
