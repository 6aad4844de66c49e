# inventory/attachments.py
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from urllib.parse import quote, urljoin

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


@dataclass
class Attachment:
    name: str
    url: str = "#"
    # bytes of a file uploaded during this session (None for CSV references)
    data: Optional[bytes] = field(default=None, repr=False)

    @property
    def is_local(self) -> bool:
        return self.data is not None


def resolve_attachment_url(path: str, base_url: str) -> str:
    if not path:
        return ""
    if _ABSOLUTE_URL.match(path):
        return path
    return urljoin(base_url, path)


def parse_attachment_entry(entry: str, base_url: str) -> Optional[Attachment]:
    """Parse one ``name|url`` entry. The url part is optional."""
    raw_name, _, raw_url = entry.partition("|")
    name = raw_name.strip()
    if not name:
        return None

    url = raw_url.strip()
    if url:
        return Attachment(name=name, url=resolve_attachment_url(url, base_url))
    return Attachment(name=name, url=f"{base_url}{quote(name)}")


def parse_attachment_list(value: Optional[str], base_url: str, separators: str = ";") -> List[Attachment]:
    if not value:
        return []

    pattern = "[" + re.escape(separators) + "]"
    attachments = []
    for entry in re.split(pattern, value):
        entry = entry.strip()
        if not entry:
            continue
        attachment = parse_attachment_entry(entry, base_url)
        if attachment:
            attachments.append(attachment)
    return attachments


def parse_labelled_attachment_list(value: Optional[str], base_url: str) -> List[Attachment]:
    """Parse ``file|label`` entries where the url is always built from the file name."""
    if not value:
        return []

    attachments = []
    for entry in value.split(";"):
        file_name, _, label = (part.strip() for part in entry.partition("|"))
        if not file_name:
            continue
        attachments.append(
            Attachment(name=label or file_name, url=resolve_attachment_url(file_name, base_url))
        )
    return attachments


def attachments_from_uploads(files: Optional[Iterable]) -> List[Attachment]:
    """Turn Streamlit ``UploadedFile`` objects (anything with name/getvalue) into attachments."""
    attachments = []
    for uploaded in files or []:
        data = uploaded.getvalue()
        if not data:
            continue
        attachments.append(Attachment(name=uploaded.name, url="#", data=data))
    return attachments
