from pydantic import BaseModel
from datetime import datetime


class FileUploadResponse(BaseModel):
    id: str
    customer_name: str
    order_id: str
    file_url: str
    uploaded_at: datetime

    class Config:
        from_attributes = True


class UploadResultResponse(BaseModel):
    success: bool = True
    message: str
    upload: FileUploadResponse


class DownloadResponse(BaseModel):
    message: str
    file_url: str
