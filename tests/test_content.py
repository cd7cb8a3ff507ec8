"""
Unit Tests for Content Flattening and Schemas
"""

from atlassian_mcp.content import IssueExtractor, StorageParser, adf_to_text
from atlassian_mcp.schemas import JiraIssue


def paragraph(*texts):
    return {"type": "paragraph", "content": [{"type": "text", "text": t} for t in texts]}


def code_macro(body, language=None):
    param = (
        f'<ac:parameter ac:name="language">{language}</ac:parameter>' if language else ""
    )
    return (
        f'<ac:structured-macro ac:name="code">{param}'
        f"<ac:plain-text-body><![CDATA[{body}]]></ac:plain-text-body>"
        "</ac:structured-macro>"
    )


class TestStorageParser:
    """Tests for StorageParser."""

    def test_simple_html(self):
        """Test converting simple HTML to Markdown."""
        markdown = StorageParser().to_markdown("<h1>Title</h1><p>Hello world</p>")

        assert "# Title" in markdown
        assert "Hello world" in markdown

    def test_code_macro_keeps_language(self):
        """Confluence code macros become fenced blocks tagged with their language."""
        markdown = StorageParser().to_markdown(code_macro("print(1)", "python"))

        assert "```python" in markdown
        assert "print(1)" in markdown

    def test_code_macro_without_language(self):
        markdown = StorageParser().to_markdown(code_macro("ls -la"))

        assert "```\nls -la" in markdown

    def test_info_panel(self):
        parser = StorageParser()
        html = (
            '<ac:structured-macro ac:name="info">'
            "<ac:rich-text-body><p>Read this first</p></ac:rich-text-body>"
            "</ac:structured-macro>"
        )

        markdown = parser.to_markdown(html)

        assert "INFO" in markdown
        assert "Read this first" in markdown

    def test_blank_lines_collapsed(self):
        markdown = StorageParser().to_markdown("<p>a</p><p></p><p></p><p></p><p>b</p>")

        assert "\n\n\n" not in markdown

    def test_empty_body(self):
        assert StorageParser().to_markdown("") == ""


class TestAdfToText:
    """Tests for adf_to_text."""

    def test_paragraphs_and_headings(self):
        doc = {
            "type": "doc",
            "content": [
                {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Steps"}]},
                paragraph("First", "line"),
            ],
        }

        assert adf_to_text(doc) == "## Steps\n\nFirst line"

    def test_marks(self):
        doc = {"content": [{"type": "paragraph", "content": [
            {"type": "text", "text": "bold", "marks": [{"type": "strong"}]},
            {"type": "text", "text": "docs", "marks": [{"type": "link", "attrs": {"href": "https://x"}}]},
        ]}]}

        assert adf_to_text(doc) == "**bold** [docs](https://x)"

    def test_lists(self):
        doc = {"content": [
            {"type": "orderedList", "content": [
                {"type": "listItem", "content": [paragraph("one")]},
                {"type": "listItem", "content": [paragraph("two")]},
            ]},
            {"type": "bulletList", "content": [
                {"type": "listItem", "content": [paragraph("dot")]},
            ]},
        ]}

        assert adf_to_text(doc) == "1. one\n2. two\n\n• dot"

    def test_table(self):
        def cell(kind, text):
            return {"type": kind, "content": [paragraph(text)]}

        doc = {"content": [{"type": "table", "content": [
            {"type": "tableRow", "content": [cell("tableHeader", "Name"), cell("tableHeader", "Owner")]},
            {"type": "tableRow", "content": [cell("tableCell", "db"), cell("tableCell", "ops")]},
        ]}]}

        assert adf_to_text(doc) == "| Name | Owner |\n| --- | --- |\n| db | ops |"

    def test_code_block_panel_and_media(self):
        doc = {"content": [
            {"type": "codeBlock", "attrs": {"language": "sql"}, "content": [{"type": "text", "text": "select 1"}]},
            {"type": "panel", "attrs": {"panelType": "warning"}, "content": [paragraph("careful")]},
            {"type": "mediaGroup", "content": [{"type": "media", "attrs": {"filename": "log.txt"}}]},
        ]}

        assert adf_to_text(doc) == "[sql]\n```\nselect 1\n```\n\n[warning] careful\n\n[log.txt]"

    def test_not_adf(self):
        assert adf_to_text(None) == ""
        assert adf_to_text({"type": "doc"}) == ""


MOCK_ISSUE = {
    "id": "1",
    "key": "TEST-123",
    "fields": {
        "summary": "Test Issue",
        "status": {"name": "Open"},
        "issuetype": {"name": "Story"},
        "assignee": {"displayName": "Test User"},
        "reporter": {"displayName": "Test Reporter"},
        "description": {
            "type": "doc",
            "version": 1,
            "content": [paragraph("This is a test description.")],
        },
        "project": {"key": "TEST", "name": "Test Project"},
        "labels": ["backend"],
        "customfield_10010": [{"name": "Team A"}, {"value": "Team B"}],
        "customfield_10020": {"value": "High"},
        "customfield_10030": 5,
        "customfield_10040": None,
    },
}


class TestJiraIssueSchema:
    """Tests for the typed core + custom field mapping."""

    def test_custom_fields_split_out(self):
        issue = JiraIssue.model_validate(MOCK_ISSUE)

        assert issue.fields.summary == "Test Issue"
        assert issue.fields.project.key == "TEST"
        assert set(issue.fields.custom_fields) == {
            "customfield_10010",
            "customfield_10020",
            "customfield_10030",
            "customfield_10040",
        }
        assert issue.fields.custom_fields["customfield_10030"] == 5

    def test_minimal_issue(self):
        issue = JiraIssue.model_validate({"key": "A-1"})

        assert issue.fields.labels == []
        assert issue.fields.custom_fields == {}


class TestIssueExtractor:
    """Tests for IssueExtractor."""

    def test_extract_issue_details(self):
        details = IssueExtractor().extract_issue_details(MOCK_ISSUE)

        assert "Issue Key: TEST-123" in details
        assert "Summary: Test Issue" in details
        assert "Status: Open" in details
        assert "Type: Story" in details
        assert "Assignee: Test User" in details
        assert "This is a test description." in details
        assert "customfield_10010: Team A, Team B" in details
        assert "customfield_10020: High" in details
        assert "customfield_10030: 5" in details
        assert "customfield_10040" not in details

    def test_fallbacks(self):
        details = IssueExtractor().extract_issue_details({"key": "A-1", "fields": {"labels": []}})

        assert "Summary: No summary" in details
        assert "Assignee: Unassigned" in details
        assert "Reporter: Unknown" in details

    def test_missing_issue(self):
        assert IssueExtractor().extract_issue_details(None) == "No issue data available"

    def test_simplify(self):
        simple = IssueExtractor().simplify(MOCK_ISSUE)

        assert simple.key == "TEST-123"
        assert simple.status == "Open"
        assert simple.issue_type == "Story"
        assert simple.labels == ["backend"]
        assert simple.description == "This is a test description."
