"""Prompts for tender extraction."""

from typing import List, Optional

_RECORD_FIELDS = (
    "title(项目名称), client(招标方), industry(行业), budget(预算范围), "
    "deadline(截止日期,YYYY-MM-DD格式), requirements(需求摘要)"
)

_OUTPUT_RULES = (
    "如果某个字段无法确定，用null。只返回JSON数组，不要其他文字。"
    "如果没有招标信息返回空数组[]。"
)

_DEDUP_RULE = "注意去重，相同项目只保留一条。"


def build_scrape_system_prompt(keywords: Optional[List[str]] = None) -> str:
    """System prompt for extracting tenders from one scraped page."""
    keyword_filter = ""
    if keywords:
        keyword_filter = f"只提取包含以下关键词之一的招标项目: {', '.join(keywords)}。"
    return (
        f"你是一个招标信息提取助手。从网页内容中提取招标公告信息，返回JSON数组。{keyword_filter}\n"
        f"每条记录包含: {_RECORD_FIELDS}。\n"
        f"{_OUTPUT_RULES}\n{_DEDUP_RULE}"
    )


def build_scrape_user_prompt(markdown: str) -> str:
    return f"请从以下网页内容中提取招标公告信息:\n\n{markdown}"


def build_search_system_prompt() -> str:
    """System prompt for extracting tenders from aggregated search results."""
    return (
        "你是一个招标信息提取助手。从搜索结果中提取招标公告信息，返回JSON数组。\n"
        f"每条记录包含: {_RECORD_FIELDS}, source_url(来源链接)。\n"
        f"{_OUTPUT_RULES}\n{_DEDUP_RULE}"
    )


def build_search_user_prompt(content: str) -> str:
    return f"请从以下搜索结果中提取招标公告信息:\n\n{content}"
