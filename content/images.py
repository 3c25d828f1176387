from django import forms
from django.template.defaultfilters import filesizeformat

# Leading bytes of the raster formats accepted for photos and the logo.
SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_image_type(data: bytes):
    """Content type recognised from the bytes themselves, or None."""
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, content_type in SIGNATURES:
        if data.startswith(signature):
            return content_type
    return None


def image_content_type(data: bytes, default="image/jpeg") -> str:
    return sniff_image_type(data) or default


def read_image_upload(upload, max_bytes: int) -> bytes:
    """Validate an uploaded image and return its bytes.

    The declared content type is only a first filter; the bytes must be PNG,
    JPEG, GIF or WebP.
    """
    content_type = getattr(upload, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise forms.ValidationError("Please select a valid image file")
    if upload.size > max_bytes:
        raise forms.ValidationError(
            f"Image size must be less than {filesizeformat(max_bytes)}"
        )
    data = upload.read()
    if sniff_image_type(data) is None:
        raise forms.ValidationError("Please select a valid image file")
    return data
