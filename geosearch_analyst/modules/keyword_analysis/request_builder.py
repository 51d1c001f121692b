"""Instruction payload for the grounded keyword analysis call.

The separator, heading and schema below are shared with the splitter and
extractor; the parser's primary strategy relies on the model honouring
exactly what this module renders.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Optional

from geosearch_analyst.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

JSON_SEPARATOR = "---JSON_START---"
SUMMARY_HEADING = "## Market Insights"
UNAVAILABLE_SENTINEL = "Data Unavailable"
ALTERNATIVES_PER_KEYWORD = 5
SERP_RESULTS_PER_KEYWORD = 10

METRIC_SCHEMA = [
    {
        "keyword": "string (the input keyword, verbatim)",
        "searchVolume": "string (e.g. '12,500', '1K-10K', 'High', or '" + UNAVAILABLE_SENTINEL + "')",
        "competition": "string (Low, Medium, High)",
        "difficulty": "string (e.g. '45/100', 'Hard')",
        "keywordType": "string (Short-tail or Long-tail)",
        "isQuickWin": "boolean",
        "siteAudit": "string (optional, only when a website is provided)",
        "recommendation": "string (actionable advice)",
        "rationale": "string (why this recommendation)",
        "serpResults": [
            {"position": 1, "title": "string", "url": "string", "snippet": "string"},
        ],
        "relatedKeywords": [
            {
                "keyword": "string",
                "searchVolume": "string",
                "competition": "string",
                "keywordType": "string (Short-tail or Long-tail)",
                "whyBetter": "string (why it beats the parent keyword)",
            },
        ],
    },
]

_KEYWORD_SPLIT = re.compile(r"[,\n]")


@dataclass(frozen=True)
class AnalysisRequest:
    """Rendered prompt plus the inputs it was built from."""

    prompt: str
    keywords: tuple[str, ...]
    location: str
    website: Optional[str] = None
    use_search_grounding: bool = True

    @property
    def keyword_count(self) -> int:
        return len(self.keywords)

    @property
    def includes_site_audit(self) -> bool:
        return bool(self.website)


def tokenize_keywords(raw: str) -> list[str]:
    """Split a comma- and/or newline-separated keyword string.

    >>> tokenize_keywords("a, b\\nc")
    ['a', 'b', 'c']
    """
    if not raw:
        return []
    return [token.strip() for token in _KEYWORD_SPLIT.split(raw) if token.strip()]


def build_request(
    keywords: str,
    location: str,
    website: Optional[str] = None,
) -> AnalysisRequest:
    """Render the analysis prompt for a keyword batch.

    Raises:
        InvalidInputError: if ``keywords`` contains no tokens.
    """
    keyword_list = tokenize_keywords(keywords)
    if not keyword_list:
        raise InvalidInputError("At least one keyword is required.")

    location = location.strip()
    website = (website or "").strip() or None
    count = len(keyword_list)
    keyword_string = ", ".join(keyword_list)

    sections = [
        "Role: Senior SEO Data Scientist.",
        "Task: Conduct a deep-dive keyword analysis for the following "
        + str(count) + " keywords: \"" + keyword_string + "\" in location: \""
        + location + "\".",
    ]
    if website:
        sections.append(
            "CONTEXT: The user owns the website \"" + website + "\". "
            "Check whether this site has content relevant to the keywords."
        )

    sections.append(
        "OBJECTIVE:\n"
        "Provide accurate, real-world data using Google Search."
    )
    sections.append(
        "CRITICAL INSTRUCTION:\n"
        "You have received exactly " + str(count) + " keywords. You MUST return a "
        "JSON array containing exactly " + str(count) + " objects, one per keyword, "
        "in the order given. Do not combine them. Do not skip any."
    )
    sections.append(_render_search_steps(keyword_list, location, website))
    sections.append(_render_extraction_rules(website))
    sections.append(
        "OUTPUT STRUCTURE:\n"
        "1. First, write a \"" + SUMMARY_HEADING + "\" section in plain text. "
        "Summarize the overall opportunity, competition levels and top "
        "recommendations. Do NOT put JSON here.\n"
        "2. Then output this exact separator on its own line: " + JSON_SEPARATOR + "\n"
        "3. Finally, output the strictly valid JSON array with the data for all "
        + str(count) + " keywords."
    )
    sections.append(
        "JSON SCHEMA (for the part after the separator):\n"
        + json.dumps(METRIC_SCHEMA, indent=2)
    )

    prompt = "\n\n".join(sections)
    logger.info(
        "Built analysis request: %d keywords, location=%r, site audit=%s",
        count, location, bool(website),
    )
    return AnalysisRequest(
        prompt=prompt,
        keywords=tuple(keyword_list),
        location=location,
        website=website,
    )


def _render_search_steps(
    keyword_list: list[str], location: str, website: Optional[str],
) -> str:
    steps = [
        "1. Volume & Stats: search for \"[keyword] search volume\" and "
        "\"[keyword] monthly searches " + location + "\".",
        "2. Competition: search for \"[keyword] keyword difficulty\".",
        "3. Alternatives: search for \"better keywords for [keyword]\" and "
        "\"related long-tail keywords for [keyword]\".",
        "4. SERP Analysis: search for the exact keyword to see the current "
        "top ranking pages.",
    ]
    if website:
        steps.append(
            "5. Site Performance: search for \"site:" + website + " "
            + keyword_list[0] + "\" (and likewise for each keyword) to check "
            "indexing and ranking visibility."
        )
    return "SEARCH INSTRUCTIONS:\n" + "\n".join(steps)


def _render_extraction_rules(website: Optional[str]) -> str:
    rules = [
        "- Search Volume: prefer specific numbers (e.g. \"12,500\"); fall back "
        "to ranges (e.g. \"1K-10K\") or qualitative bands (High, Medium, Low). "
        "Never invent figures: if no data can be found, use exactly \""
        + UNAVAILABLE_SENTINEL + "\".",
        "- Tail Type: 'Short-tail' for 1-2 word broad phrases, 'Long-tail' for "
        "3+ word specific phrases.",
        "- Quick Win: set 'isQuickWin' to true ONLY if volume is decent "
        "(e.g. >500) AND competition is Low or Medium.",
        "- Alternatives: provide exactly " + str(ALTERNATIVES_PER_KEYWORD)
        + " better alternative keywords, each with its own volume and "
        "competition, and say why it is better.",
        "- SERP Results: list the top " + str(SERP_RESULTS_PER_KEYWORD)
        + " organic results with title, URL and a brief snippet.",
    ]
    if website:
        rules.append(
            "- Site Audit: estimate the site's current performance for each "
            "keyword (e.g. \"Indexed\", \"Not found\", \"Low relevance content\")."
        )
    return "DATA EXTRACTION RULES:\n" + "\n".join(rules)
