import os
from typing import List, Optional
from fastapi import APIRouter, Request, UploadFile, File, Form, status

from ..auth.authorization import CustomerOrAdmin, is_owner, ensure_owner
from ..auth.models import MessageResponse
from ..core.exceptions import StorefrontError, UnexpectedError
from ..core.flash import flash
from ..database.core import DbSession
from ..schemas.uploads import FileUploadResponse, UploadResultResponse, DownloadResponse
from ..users.models import Role
from ..logging import logger
from .service import UploadService
from .storage import storage

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.get("/", response_model=List[FileUploadResponse])
async def list_uploads(current_user: CustomerOrAdmin, db: DbSession):
    """Customers see their own uploads; admins see all"""
    try:
        uploads = UploadService.get_all_uploads(db)
    except Exception as e:
        logger.exception("Error loading uploads")
        raise UnexpectedError("load uploads", str(e)) from e

    visible = [u for u in uploads if is_owner(current_user, u.customer_name)]
    logger.info(f"User {current_user.username} viewing {len(visible)} uploads")
    return visible


@router.post("/", response_model=UploadResultResponse, status_code=status.HTTP_201_CREATED)
async def upload_proof_of_payment(
    request: Request,
    current_user: CustomerOrAdmin,
    db: DbSession,
    proof_of_payment: UploadFile = File(..., description="Proof of payment (.pdf, .jpg, .jpeg, .png, .doc, .docx)."),
    order_id: Optional[str] = Form(None),
    customer_name: Optional[str] = Form(None),
):
    # A customer can only upload under their own name
    if current_user.role == Role.CUSTOMER.value:
        customer_name = current_user.username

    logger.info(
        f"User {current_user.username} uploading file: {proof_of_payment.filename} "
        f"for Customer: {customer_name}, Order: {order_id}"
    )
    try:
        contents = await proof_of_payment.read()
        upload = UploadService.upload_proof_of_payment(
            db, storage, proof_of_payment, len(contents), order_id, customer_name
        )
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error uploading file for user {current_user.username}")
        raise UnexpectedError("upload the file", str(e)) from e

    file_name = os.path.basename(upload.file_url)
    flash(request, "success", "Proof of payment uploaded successfully!")
    return UploadResultResponse(
        message=f"File '{file_name}' uploaded successfully!",
        upload=FileUploadResponse.model_validate(upload),
    )


@router.get("/{upload_id}", response_model=FileUploadResponse)
async def get_upload(upload_id: str, current_user: CustomerOrAdmin, db: DbSession):
    try:
        upload = UploadService.get_upload_by_id(db, upload_id)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error loading upload details {upload_id}")
        raise UnexpectedError("load the upload", str(e)) from e

    ensure_owner(current_user, upload.customer_name, "upload", upload_id)
    return upload


@router.delete("/{upload_id}", response_model=MessageResponse)
async def delete_upload(
    request: Request,
    upload_id: str,
    current_user: CustomerOrAdmin,
    db: DbSession
):
    try:
        upload = UploadService.get_upload_by_id(db, upload_id)
        ensure_owner(current_user, upload.customer_name, "upload", upload_id)
        UploadService.delete_upload(db, upload)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting upload {upload_id}")
        raise UnexpectedError("delete the upload", str(e)) from e

    logger.info(f"Upload {upload_id} deleted by {current_user.username}")
    message = "Upload deleted successfully!"
    flash(request, "success", message)
    return MessageResponse(message=message, redirect="/uploads")


@router.get("/{upload_id}/download", response_model=DownloadResponse)
async def download_upload(
    request: Request,
    upload_id: str,
    current_user: CustomerOrAdmin,
    db: DbSession
):
    """No bytes are kept, so a download only reports the file name"""
    try:
        upload = UploadService.get_upload_by_id(db, upload_id)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error downloading upload {upload_id}")
        raise UnexpectedError("download the file", str(e)) from e

    ensure_owner(current_user, upload.customer_name, "upload", upload_id)
    message = f"Download initiated for: {os.path.basename(upload.file_url)}"
    flash(request, "success", message)
    logger.info(f"Upload {upload_id} downloaded by {current_user.username}")
    return DownloadResponse(message=message, file_url=upload.file_url)
