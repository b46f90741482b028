import os
from datetime import datetime
from typing import Optional

from fastapi import UploadFile

from ..logging import logger


class ProofOfPaymentStorage:
    """
    Names proof-of-payment files.

    Nothing is written anywhere: the storefront keeps only the generated
    name, which is recorded against the order.
    """

    def __init__(self, clock=datetime.now):
        self._clock = clock

    def save(self, file: UploadFile, order_id: Optional[str], customer_name: Optional[str]) -> str:
        safe_filename = os.path.basename(file.filename or "")
        file_name = f"uploaded_{self._clock().strftime('%Y%m%d%H%M%S')}_{safe_filename}"
        logger.info(f"Stored proof of payment {file_name} for order {order_id} ({customer_name})")
        return file_name


storage = ProofOfPaymentStorage()
