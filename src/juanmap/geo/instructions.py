import re

_BLOCK_TAG_RE = re.compile(r"<(?:div|br|p)\b[^>]*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")


def strip_html_instructions(html) -> str:
    """
    將 Directions API 的 html_instructions 轉為純文字。

    移除所有 HTML 標籤（區塊標籤以空白取代，避免前後句黏在一起），
    還原 &nbsp; 與 &amp;，並壓縮多餘空白。
    """
    if not html:
        return ""
    text = _BLOCK_TAG_RE.sub(" ", str(html))
    text = _TAG_RE.sub("", text)
    text = text.replace("&nbsp;", " ").replace("&amp;", "&")
    return _SPACE_RE.sub(" ", text).strip()
