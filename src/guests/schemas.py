from pydantic import BaseModel

SERVER_ERROR_MESSAGE = "Server error - please try again"


class MessageResponse(BaseModel):
    success: bool
    message: str
