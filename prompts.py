"""
Prompt templates for the SEO assistant calls.
"""

SEO_CONSULTANT_SYSTEM = (
    "You are an expert SEO consultant. Analyze the content and provide "
    "actionable suggestions to improve SEO."
)

META_DESCRIPTION_SYSTEM = (
    "You are an expert SEO consultant. Generate optimized meta descriptions "
    "that are compelling and under 160 characters."
)

KEYWORD_RESEARCH_SYSTEM = (
    "You are an expert SEO and keyword research specialist. Analyze keywords "
    "and provide insights on difficulty and strategy."
)

CONTENT_BRIEF_SYSTEM = (
    "You are an expert content strategist and SEO consultant. Create detailed "
    "content briefs to help writers create SEO-optimized content."
)


def get_suggestions_prompt(url: str, content: str) -> str:
    return f"""Analyze the following content from {url} and provide 3-5 specific SEO improvement suggestions:

{content}"""


def get_meta_description_prompt(title: str, content: str) -> str:
    return f"""Generate an SEO-optimized meta description for the following content:
Title: {title}
Content: {content}"""


def get_keyword_difficulty_prompt(keyword: str, competitors: list[str]) -> str:
    competitor_list = ", ".join(competitors) if competitors else "none provided"
    return f"""Analyze the keyword "{keyword}" and provide insights on its difficulty level, considering these competitors: {competitor_list}"""


def get_content_brief_prompt(keyword: str, target_audience: str) -> str:
    return f"""Create a content brief for an article targeting the keyword "{keyword}" for {target_audience}. Include suggested headings, key points to cover, and relevant secondary keywords."""
