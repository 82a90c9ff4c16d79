"""Rich text helpers."""

from bs4 import BeautifulSoup


def html_to_text(html: str | None) -> str:
    """
    Reduce rich text HTML to whitespace-normalized plain text.

    Args:
        html: Rich text markup as stored on sections and jobs

    Returns:
        Plain text

    Examples:
        >>> html_to_text("<p>Join <b>us</b></p><ul><li>Remote</li></ul>")
        'Join us Remote'
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return " ".join(soup.get_text(separator=" ").split())
