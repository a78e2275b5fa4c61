"""
Receipt upload handling: read the uploaded file and tidy grocery-website
copy/paste text before it is sent to the model.
"""

import base64
import logging
import re
from dataclasses import dataclass

import fitz  # PyMuPDF
from fastapi import UploadFile

from expiry_tracker.config import get_settings
from expiry_tracker.errors import UnsupportedMediaType, ValidationError

logger = logging.getLogger(__name__)

WEB_COPY_MARKERS = [
    re.compile(r"Skip to content", re.I),
    re.compile(r"©\d{4}"),
    re.compile(r"Privacy Policy", re.I),
    re.compile(r"Terms and Conditions", re.I),
    re.compile(r"Follow us on", re.I),
    re.compile(r"Facebook site logo", re.I),
    re.compile(r"All Rights Reserved", re.I),
    re.compile(r"Digital Coupons", re.I),
    re.compile(r"Weekly Ad", re.I),
    re.compile(r"Store Locator", re.I),
]
WEB_COPY_THRESHOLD = 3

# (pattern, replacement), applied in order
_CLEANUP_RULES = [
    (re.compile(r"^.*?(?=Purchase Details|In-store|Order Details|Items)", re.I | re.S), ""),
    (re.compile(r"(?:ABOUT US|GET THE APP|Let's Connect|All Contents ©)[\s\S]*$", re.I), ""),
    (re.compile(r"Skip to content[\s\S]*?(?=Purchase|In-store)", re.I), ""),
    (re.compile(r"Digital Coupons|Weekly Ad|Meal Planning|Store Locator|Breadcrumb", re.I), ""),
    (re.compile(r"Home(?:Purchase History)?Purchase Details", re.I), "Purchase Details"),
    (re.compile(r"(?:X|Facebook|YouTube|Pinterest|Instagram) site logo", re.I), ""),
    (re.compile(r"Privacy Policy|Terms and Conditions|HIPAA Notice", re.I), ""),
    (re.compile(r"Financial Products.*?Privacy Policy", re.I | re.S), ""),
    (re.compile(r"Review your experience.*?Take Survey.*?(?:\n|$)", re.I), ""),
    (re.compile(r"\(Opens in a new tab or window\)", re.I), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]

TEXT_TYPES = {"text/plain", "text/csv"}
PDF_TYPE = "application/pdf"


@dataclass
class ReceiptContent:
    """Either ``text`` or ``image_data`` + ``media_type`` is set."""

    text: str | None = None
    image_data: str | None = None
    media_type: str | None = None

    @property
    def image(self) -> tuple[str, str] | None:
        if self.image_data is None:
            return None
        return self.image_data, self.media_type


def looks_like_web_copy_paste(content: str) -> bool:
    matches = sum(1 for pattern in WEB_COPY_MARKERS if pattern.search(content))
    return matches >= WEB_COPY_THRESHOLD


def clean_web_receipt_content(content: str) -> str:
    """Strip site navigation, footer and marketing text from a pasted order page."""
    cleaned = content
    for pattern, replacement in _CLEANUP_RULES:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = cleaned.strip()
    logger.info(f"Cleaned web receipt content: {len(content)} -> {len(cleaned)} characters")
    return cleaned


def extract_pdf_text(data: bytes) -> str:
    """Concatenate the text layer of every page. Scanned PDFs have none."""
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            text = "\n".join(page.get_text() for page in doc)
    except Exception as e:
        raise ValidationError("Failed to extract content from file", details=str(e))
    if not text.strip():
        raise ValidationError(
            "Failed to extract content from file",
            details="PDF appears to contain no readable text",
        )
    logger.info(f"Extracted {len(text)} characters from PDF")
    return text


def _media_type(file: UploadFile) -> str:
    media_type = (file.content_type or "").split(";")[0].strip().lower()
    filename = (file.filename or "").lower()
    if filename.endswith(".csv"):
        return "text/csv"
    if filename.endswith(".pdf"):
        return PDF_TYPE
    if media_type in ("", "application/octet-stream") and filename.endswith(".txt"):
        return "text/plain"
    return media_type


async def read_receipt_upload(file: UploadFile | None) -> ReceiptContent:
    """Read an uploaded receipt into text or a base64 image."""
    if file is None:
        raise ValidationError("No file provided")

    media_type = _media_type(file)
    if media_type not in TEXT_TYPES and media_type != PDF_TYPE and not media_type.startswith("image/"):
        raise UnsupportedMediaType(
            "Unsupported receipt file type",
            details=f"Expected text/plain, text/csv, a PDF or an image, got '{media_type or 'unknown'}'",
        )

    data = await file.read()
    max_bytes = get_settings().MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(data) > max_bytes:
        raise ValidationError(f"File too large (max {get_settings().MAX_UPLOAD_SIZE_MB} MB)")
    if not data:
        raise ValidationError("Failed to extract content from file", details="File appears to be empty")

    logger.info(f"Receipt upload: {file.filename} ({len(data)} bytes, {media_type})")

    if media_type.startswith("image/"):
        return ReceiptContent(image_data=base64.b64encode(data).decode("ascii"), media_type=media_type)

    if media_type == PDF_TYPE:
        text = extract_pdf_text(data)
    else:
        text = data.decode("utf-8-sig", errors="replace")  # handle BOM
    if not text.strip():
        raise ValidationError("Failed to extract content from file", details="File appears to be empty")
    if looks_like_web_copy_paste(text):
        logger.info("Detected grocery website copy/paste")
        text = clean_web_receipt_content(text)
    return ReceiptContent(text=text)
