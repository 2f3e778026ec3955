import base64
import secrets
import string
import uuid
from typing import Optional

_BASE36 = string.digits + string.ascii_lowercase


def generate_project_id() -> str:
    """
    Generate a unique project ID.

    Returns:
        str: A prefixed UUID string for the project.
    """
    return f"sol-p-{uuid.uuid4().hex}"


def generate_proposal_id() -> str:
    return f"prop-{uuid.uuid4().hex}"


def generate_signature(prefix: str = "sig_") -> str:
    """
    Generate a signature-like identifier for a simulated ledger entry.

    Args:
        prefix (str): Leading marker, e.g. "sig_" for deposits or "sig_rel_" for releases.

    Returns:
        str: The prefix followed by 13 random base36 characters.
    """
    return prefix + "".join(secrets.choice(_BASE36) for _ in range(13))


def short_address(address: str) -> str:
    """Display form of a wallet address: first four and last four characters."""
    return f"{address[:4]}...{address[-4:]}"


def encode_data_url(content: bytes, mime_type: Optional[str] = None) -> str:
    """
    Encode an uploaded file as a data URL, the way a browser FileReader does.

    Args:
        content (bytes): Raw file bytes.
        mime_type (Optional[str]): Content type; defaults to application/pdf.

    Returns:
        str: ``data:<mime>;base64,<payload>``
    """
    encoded = base64.b64encode(content).decode("utf-8")
    return f"data:{mime_type or 'application/pdf'};base64,{encoded}"
