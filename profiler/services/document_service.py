from __future__ import annotations

from io import BytesIO

from docx import Document
from pypdf import PdfReader

from profiler.schemas.research import ExtractTextResponse

ALLOWED_EXTENSIONS = {"txt", "md", "pdf", "docx"}


def _decode_text(content: bytes) -> str:
    # utf-16 is only tried with a BOM; without one it decodes almost anything.
    encodings = ("utf-16", "utf-8") if content[:2] in {b"\xff\xfe", b"\xfe\xff"} else ("utf-8-sig", "latin-1")
    for encoding in encodings:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    return content.decode("utf-8", errors="replace")


def _extract_pdf(content: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(content))
        pages = [(page.extract_text() or "") for page in reader.pages]
    except Exception as exc:
        raise ValueError("Unable to extract text from this PDF file.") from exc
    return "\n\n".join(page for page in pages if page.strip())


def _extract_docx(content: bytes) -> str:
    try:
        doc = Document(BytesIO(content))
    except Exception as exc:
        raise ValueError("Unable to extract text from this Word document.") from exc
    return "\n".join(paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip())


def extract_text(filename: str, content: bytes) -> ExtractTextResponse:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in ALLOWED_EXTENSIONS:
        raise ValueError(f"Unsupported file type '.{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}.")
    if not content:
        raise ValueError("Uploaded file is empty.")

    if ext in {"txt", "md"}:
        text = _decode_text(content)
    elif ext == "pdf":
        text = _extract_pdf(content)
    else:
        text = _extract_docx(content)

    text = text.replace("\r\n", "\n").strip()
    if not text:
        raise ValueError("No extractable text found in this file.")

    return ExtractTextResponse(
        filename=filename,
        extension=ext,
        text=text,
        characters=len(text),
        word_count=len(text.split()),
    )
