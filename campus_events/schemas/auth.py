from pydantic import BaseModel, Field


class SendOtpRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)


class VerifyOtpRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    code: str = Field(min_length=6, max_length=6)


class SuccessOut(BaseModel):
    success: bool = True
