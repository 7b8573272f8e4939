# =============================================================================
# lib/article.py - Article Quality Checks
# =============================================================================
# Editorial checks for docs/fastapi-for-express-developers.md:
# - Every Python snippet parses
# - Every Express snippet is followed by its FastAPI counterpart
# - Framework names are spelled the same way throughout the prose
# - Every external link resolves (network check, optional)
#
# Line numbers reported by every check refer to the Markdown file, so an
# editor can jump straight to the problem.
#
# Usage:
#   from lib.article import build_report, check_links, load_article
#   text = load_article("docs/fastapi-for-express-developers.md")
#   report = build_report(text)
#   report.link_results = await check_links(report.links)
# =============================================================================

from __future__ import annotations

import ast
import asyncio
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import httpx

# Set up logging for this module
logger = logging.getLogger(__name__)

PYTHON_LANGUAGES = frozenset({"python", "py", "python3"})
JAVASCRIPT_LANGUAGES = frozenset({"javascript", "js", "node"})

# Status codes that mean "this server doesn't answer HEAD", retried with GET
HEAD_FALLBACK_STATUSES = frozenset({403, 405, 501})

USER_AGENT = "fastapi-express-catalog-article-checker/1.0"

_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`]*)$")
_INLINE_CODE_RE = re.compile(r"(`+)(?:(?!\1).)+?\1")
_INLINE_LINK_RE = re.compile(r"!?\[(?P<text>[^\]]*)\]\((?P<url>(?:[^()\s]|\([^()\s]*\))+)(?:\s+\"[^\"]*\")?\)")
_AUTOLINK_RE = re.compile(r"<(?P<url>https?://[^>\s]+)>")
_BARE_URL_RE = re.compile(r"https?://[^\s<>()\[\]\"'`]+")
_TRAILING_PUNCTUATION = ".,;:!?"

# (pattern, canonical spelling); patterns are case-sensitive on purpose so
# the canonical spelling itself never matches
TERMINOLOGY_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bFast[ -]API\b|\bFastApi\b|\bFastapi\b|\bfastAPI\b|\bfastapi\b|\bFASTAPI\b"), "FastAPI"),
    (re.compile(r"\bExpress ?JS\b|\bExpressjs\b|\bExpress\.JS\b|\bexpress\.js\b|\bexpressjs\b"), "Express.js"),
    (re.compile(r"\bNode ?JS\b|\bNodejs\b|\bNode\.JS\b|\bnode\.js\b|\bnodejs\b"), "Node.js"),
    (re.compile(r"\bpydantic\b|\bPyDantic\b|\bPYDANTIC\b"), "Pydantic"),
    (re.compile(r"\bJavascript\b|\bjavaScript\b"), "JavaScript"),
]


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block. start_line is the line of the opening fence."""
    language: str
    code: str
    start_line: int


@dataclass(frozen=True)
class SnippetIssue:
    line: int
    language: str
    message: str


@dataclass(frozen=True)
class PairingIssue:
    line: int
    message: str


@dataclass(frozen=True)
class TermIssue:
    line: int
    found: str
    expected: str


@dataclass(frozen=True)
class Link:
    url: str
    line: int
    text: str | None = None


@dataclass(frozen=True)
class LinkResult:
    url: str
    ok: bool
    status_code: int | None = None
    error: str | None = None


@dataclass
class ArticleReport:
    """
    Results of every check on one article.

    link_results stays None until the (network) link check runs.
    """
    code_blocks: list[CodeBlock] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    snippet_issues: list[SnippetIssue] = field(default_factory=list)
    pairing_issues: list[PairingIssue] = field(default_factory=list)
    term_issues: list[TermIssue] = field(default_factory=list)
    link_results: list[LinkResult] | None = None

    @property
    def broken_links(self) -> list[LinkResult]:
        return [result for result in self.link_results or [] if not result.ok]

    @property
    def ok(self) -> bool:
        return not (
            self.snippet_issues
            or self.pairing_issues
            or self.term_issues
            or self.broken_links
        )

    def summary(self) -> str:
        """Human-readable multi-line report."""
        python_blocks = sum(1 for block in self.code_blocks if block.language in PYTHON_LANGUAGES)
        lines = [
            f"Code blocks: {len(self.code_blocks)} ({python_blocks} Python)",
            f"Links: {len(self.links)}",
        ]
        for issue in self.snippet_issues:
            lines.append(f"  line {issue.line}: [{issue.language}] {issue.message}")
        for issue in self.pairing_issues:
            lines.append(f"  line {issue.line}: {issue.message}")
        for issue in self.term_issues:
            lines.append(f"  line {issue.line}: '{issue.found}' should be '{issue.expected}'")
        if self.link_results is not None:
            for result in self.broken_links:
                reason = result.error or f"HTTP {result.status_code}"
                lines.append(f"  broken link: {result.url} ({reason})")
        else:
            lines.append("Link check skipped")
        lines.append("OK" if self.ok else "FAILED")
        return "\n".join(lines)


# =============================================================================
# Parsing
# =============================================================================

def load_article(path: str | Path) -> str:
    """Read an article as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")


def _split_fences(text: str) -> tuple[list[CodeBlock], list[str]]:
    """
    Separate fenced code from prose.

    Returns:
        Tuple of (code blocks, prose lines). Prose lines keep the article's
        numbering; lines that belong to a fence are replaced by "".
        An unterminated fence runs to the end of the file.
    """
    blocks: list[CodeBlock] = []
    prose: list[str] = []

    fence: str | None = None
    language = ""
    start_line = 0
    body: list[str] = []

    for number, line in enumerate(text.splitlines(), start=1):
        if fence is None:
            match = _FENCE_RE.match(line)
            if match:
                fence = match.group("fence")
                info = match.group("info").strip()
                language = info.split()[0].lower() if info else ""
                start_line = number
                body = []
                prose.append("")
            else:
                prose.append(line)
            continue

        stripped = line.strip()
        if stripped.startswith(fence[0] * len(fence)) and set(stripped) == {fence[0]}:
            blocks.append(CodeBlock(language, "\n".join(body), start_line))
            fence = None
        else:
            body.append(line)
        prose.append("")

    if fence is not None:
        blocks.append(CodeBlock(language, "\n".join(body), start_line))

    return blocks, prose


def extract_code_blocks(text: str) -> list[CodeBlock]:
    """Return every fenced code block in order of appearance."""
    return _split_fences(text)[0]


def extract_links(text: str) -> list[Link]:
    """
    Return external http(s) links found in the prose.

    Inline links, autolinks and bare URLs are collected; links inside code
    blocks or inline code are ignored. Each URL is reported once, at its
    first appearance.
    """
    _, prose = _split_fences(text)
    links: list[Link] = []
    seen: set[str] = set()

    def add(url: str, line: int, label: str | None = None) -> None:
        url = url.rstrip(_TRAILING_PUNCTUATION)
        if not url.startswith(("http://", "https://")) or url in seen:
            return
        seen.add(url)
        links.append(Link(url=url, line=line, text=label))

    for number, line in enumerate(prose, start=1):
        line = _INLINE_CODE_RE.sub(" ", line)

        for match in _INLINE_LINK_RE.finditer(line):
            add(match.group("url"), number, match.group("text"))
        line = _INLINE_LINK_RE.sub(" ", line)

        for match in _AUTOLINK_RE.finditer(line):
            add(match.group("url"), number)
        line = _AUTOLINK_RE.sub(" ", line)

        for match in _BARE_URL_RE.finditer(line):
            add(match.group(0), number)

    return links


# =============================================================================
# Offline Checks
# =============================================================================

def check_python_snippets(blocks: list[CodeBlock]) -> list[SnippetIssue]:
    """
    Parse every Python block.

    The reported line is the article line of the syntax error.
    """
    issues: list[SnippetIssue] = []
    for block in blocks:
        if block.language not in PYTHON_LANGUAGES:
            continue
        try:
            ast.parse(block.code)
        except SyntaxError as e:
            line = block.start_line + (e.lineno or 1)
            issues.append(SnippetIssue(line=line, language=block.language, message=e.msg))
    return issues


def check_comparison_pairs(blocks: list[CodeBlock]) -> list[PairingIssue]:
    """
    Every Express (JavaScript) block must be followed by a Python block.
    """
    issues: list[PairingIssue] = []
    for index, block in enumerate(blocks):
        if block.language not in JAVASCRIPT_LANGUAGES:
            continue
        following = blocks[index + 1] if index + 1 < len(blocks) else None
        if following is None or following.language not in PYTHON_LANGUAGES:
            issues.append(PairingIssue(
                line=block.start_line,
                message="JavaScript example has no FastAPI counterpart after it",
            ))
    return issues


def find_terminology_issues(text: str) -> list[TermIssue]:
    """
    Flag non-canonical spellings of framework names in the prose.

    Code blocks, inline code and URLs are skipped.
    """
    _, prose = _split_fences(text)
    issues: list[TermIssue] = []

    for number, line in enumerate(prose, start=1):
        line = _INLINE_CODE_RE.sub(" ", line)
        line = _INLINE_LINK_RE.sub(lambda m: f" {m.group('text')} ", line)
        line = _AUTOLINK_RE.sub(" ", line)
        line = _BARE_URL_RE.sub(" ", line)

        for pattern, canonical in TERMINOLOGY_RULES:
            for match in pattern.finditer(line):
                issues.append(TermIssue(line=number, found=match.group(0), expected=canonical))

    issues.sort(key=lambda issue: issue.line)
    return issues


def build_report(text: str) -> ArticleReport:
    """Run every offline check on the article text."""
    blocks = extract_code_blocks(text)
    return ArticleReport(
        code_blocks=blocks,
        links=extract_links(text),
        snippet_issues=check_python_snippets(blocks),
        pairing_issues=check_comparison_pairs(blocks),
        term_issues=find_terminology_issues(text),
    )


# =============================================================================
# Link Check
# =============================================================================

async def _check_one(
    client: httpx.AsyncClient,
    semaphore: asyncio.Semaphore,
    link: Link,
) -> LinkResult:
    async with semaphore:
        try:
            response = await client.head(link.url)
            if response.status_code in HEAD_FALLBACK_STATUSES:
                response = await client.get(link.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Link check failed for {link.url}: {e}")
            return LinkResult(url=link.url, ok=False, error=str(e) or type(e).__name__)

    ok = response.status_code < 400
    if not ok:
        logger.warning(f"Link {link.url} returned {response.status_code}")
    return LinkResult(url=link.url, ok=ok, status_code=response.status_code)


async def check_links(
    links: list[Link],
    timeout: float = 10.0,
    concurrency: int = 5,
    client: httpx.AsyncClient | None = None,
) -> list[LinkResult]:
    """
    Check that every link resolves (final status below 400).

    Requests HEAD first and falls back to GET for servers that refuse HEAD.
    Redirects are followed. At most `concurrency` requests run at once.

    Args:
        links: Links to check
        timeout: Per-request timeout in seconds
        concurrency: Maximum simultaneous requests
        client: Optional preconfigured client (used by tests)

    Returns:
        One LinkResult per link, in input order
    """
    semaphore = asyncio.Semaphore(concurrency)

    if client is not None:
        return list(await asyncio.gather(*(_check_one(client, semaphore, link) for link in links)))

    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    ) as owned_client:
        return list(await asyncio.gather(*(_check_one(owned_client, semaphore, link) for link in links)))
