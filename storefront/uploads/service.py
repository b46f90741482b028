import os
from typing import List, Optional
from uuid import uuid4
from datetime import datetime, timezone

from fastapi import UploadFile
from sqlalchemy.orm import Session

from .models import FileUpload
from .storage import ProofOfPaymentStorage
from ..core.config import settings
from ..core.exceptions import NotFoundError, ValidationError
from ..logging import logger

UNKNOWN_CUSTOMER = "Unknown Customer"
NO_ORDER_ID = "No Order ID"


def validate_upload(filename: Optional[str], size: int) -> None:
    """Rejects empty, oversized and unsupported files"""
    if not filename or size == 0:
        raise ValidationError(field="proof_of_payment", user_message="Please select a file.")

    if size > settings.MAX_UPLOAD_BYTES:
        limit_mb = settings.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise ValidationError(
            field="proof_of_payment",
            user_message=f"File size must be less than {limit_mb}MB.",
            technical_details=f"{size} bytes",
        )

    extension = os.path.splitext(filename)[1].lower()
    if extension not in settings.ALLOWED_UPLOAD_EXTENSIONS:
        allowed = ", ".join(ext.lstrip(".").upper() for ext in settings.ALLOWED_UPLOAD_EXTENSIONS)
        raise ValidationError(
            field="proof_of_payment",
            user_message=f"Allowed file types: {allowed}",
            technical_details=f"extension {extension or '(none)'}",
        )


class UploadService:

    @staticmethod
    def get_all_uploads(db: Session) -> List[FileUpload]:
        return db.query(FileUpload).order_by(FileUpload.uploaded_at.desc()).all()

    @staticmethod
    def get_upload_by_id(db: Session, upload_id: str) -> FileUpload:
        upload = db.query(FileUpload).filter(FileUpload.id == upload_id).first()
        if not upload:
            logger.warning(f"Upload not found with ID: {upload_id}")
            raise NotFoundError("Upload", upload_id, redirect="/uploads")
        return upload

    @staticmethod
    def upload_proof_of_payment(
        db: Session,
        storage: ProofOfPaymentStorage,
        file: UploadFile,
        size: int,
        order_id: Optional[str],
        customer_name: Optional[str],
    ) -> FileUpload:
        validate_upload(file.filename, size)

        file_name = storage.save(file, order_id, customer_name)
        upload = FileUpload(
            id=str(uuid4()),
            customer_name=customer_name or UNKNOWN_CUSTOMER,
            order_id=order_id or NO_ORDER_ID,
            file_url=f"/uploads/{file_name}",
            uploaded_at=datetime.now(timezone.utc),
        )
        db.add(upload)
        db.commit()
        db.refresh(upload)
        logger.info(f"File uploaded successfully: {file_name} for order {upload.order_id}")
        return upload

    @staticmethod
    def delete_upload(db: Session, upload: FileUpload) -> None:
        db.delete(upload)
        db.commit()
