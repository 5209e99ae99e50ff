from pydantic import BaseModel


class FormSubmissionResponse(BaseModel):
    success: bool
