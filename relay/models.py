from pydantic import BaseModel, Field

MAX_MESSAGE_LENGTH = 1000


class ChatRequest(BaseModel):
    # emptiness is checked after trimming, in the route
    message: str = Field(..., max_length=MAX_MESSAGE_LENGTH, description="User input message")

class ChatResponse(BaseModel):
    response: str

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str = "healthy"
