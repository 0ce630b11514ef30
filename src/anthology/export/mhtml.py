"""MHTML (web archive) packaging for Word-compatible downloads."""

from email.message import EmailMessage


def to_mhtml(html_text: str, location: str = "about:blank") -> str:
    """
    Wrap an HTML document in a multipart/related MIME archive.

    The HTML part is quoted-printable encoded UTF-8, which Word opens
    directly and can re-save as .docx.
    """
    archive = EmailMessage()
    archive.set_content(html_text, subtype="html", charset="utf-8", cte="quoted-printable")
    archive.make_related()
    archive.get_payload()[0]["Content-Location"] = location
    return archive.as_string()
