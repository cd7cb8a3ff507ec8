"""
Content - Storage Format Parser

Confluence storage-format XHTML → Markdown, with code, panel and expand
macro handling.
"""

import re
from bs4 import BeautifulSoup
from markdownify import markdownify as md

PANEL_MACROS = ("info", "note", "warning", "tip")
LANGUAGE_PREFIX = "language-"


def _code_language(pre) -> str:
    """Fence language for a ``<pre>`` block, from its ``language-x`` class."""
    code = pre.find("code") or pre
    classes = code.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    for cls in classes:
        if cls.startswith(LANGUAGE_PREFIX):
            return cls[len(LANGUAGE_PREFIX):]
    return ""


class StorageParser:
    """Parses Confluence storage format to Markdown."""

    def to_markdown(self, html_content: str) -> str:
        """
        Convert a page body to Markdown.

        Args:
            html_content: Raw ``body.storage.value`` of a page

        Returns:
            Markdown with ATX headings and language-tagged code fences
        """
        if not html_content:
            return ""

        soup = BeautifulSoup(html_content, "html.parser")
        self._process_macros(soup)

        markdown = md(
            str(soup),
            heading_style="ATX",
            code_language_callback=_code_language,
        )
        return re.sub(r"\n{3,}", "\n\n", markdown).strip()

    def _process_macros(self, soup: BeautifulSoup) -> None:
        """Replace Confluence macros with plain HTML equivalents."""
        for macro in soup.find_all("ac:structured-macro", {"ac:name": "code"}):
            language = ""
            lang_param = macro.find("ac:parameter", {"ac:name": "language"})
            if lang_param:
                language = lang_param.get_text()

            body = macro.find("ac:plain-text-body")
            pre = soup.new_tag("pre")
            code_tag = soup.new_tag("code", attrs={"class": f"{LANGUAGE_PREFIX}{language}"})
            code_tag.string = body.get_text() if body else ""
            pre.append(code_tag)
            macro.replace_with(pre)

        for panel_type in PANEL_MACROS:
            for macro in soup.find_all("ac:structured-macro", {"ac:name": panel_type}):
                body = macro.find("ac:rich-text-body")
                blockquote = soup.new_tag("blockquote")
                label = soup.new_tag("strong")
                label.string = f"[{panel_type.upper()}]"
                blockquote.append(label)
                blockquote.append(" ")
                if body:
                    for child in list(body.children):
                        blockquote.append(child)
                macro.replace_with(blockquote)

        for macro in soup.find_all("ac:structured-macro", {"ac:name": "expand"}):
            title_param = macro.find("ac:parameter", {"ac:name": "title"})
            body = macro.find("ac:rich-text-body")
            section = soup.new_tag("div")
            if title_param and title_param.get_text():
                heading = soup.new_tag("p")
                strong = soup.new_tag("strong")
                strong.string = title_param.get_text()
                heading.append(strong)
                section.append(heading)
            if body:
                for child in list(body.children):
                    section.append(child)
            macro.replace_with(section)
