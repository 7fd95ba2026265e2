"""
API response schemas.
What it defines:
- Response formats for create and error bodies

Request and record shapes live in services/schemas.py.
"""


from pydantic import BaseModel

class CreatedResponse(BaseModel):
    id: str

class ErrorResponse(BaseModel):
    error: str
