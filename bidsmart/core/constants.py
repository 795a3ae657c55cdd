"""Application constants."""

# Display formatting
SEPARATOR_LINE = "=" * 60

# Storage slot keys
STORAGE_KEY_PROJECTS = "bidsmart_projects"
STORAGE_KEY_CASES = "bidsmart_cases"

# Project status values
PROJECT_STATUS_PENDING = "pending"
PROJECT_STATUS_DESIGNING = "designing"
PROJECT_STATUS_QUOTING = "quoting"
PROJECT_STATUS_SUBMITTED = "submitted"
PROJECT_STATUS_ARCHIVED = "archived"

# Ordered pipeline driven by "advance to next step"
PIPELINE_STEPS = (
    PROJECT_STATUS_PENDING,
    PROJECT_STATUS_DESIGNING,
    PROJECT_STATUS_QUOTING,
    PROJECT_STATUS_SUBMITTED,
)

# Forward-only moves, plus the archival step after submission
STATUS_TRANSITIONS = {
    PROJECT_STATUS_PENDING: {PROJECT_STATUS_DESIGNING},
    PROJECT_STATUS_DESIGNING: {PROJECT_STATUS_QUOTING},
    PROJECT_STATUS_QUOTING: {PROJECT_STATUS_SUBMITTED},
    PROJECT_STATUS_SUBMITTED: {PROJECT_STATUS_ARCHIVED},
    PROJECT_STATUS_ARCHIVED: set(),
}

# Display labels
STATUS_LABELS = {
    PROJECT_STATUS_PENDING: "待确认",
    PROJECT_STATUS_DESIGNING: "设计中",
    PROJECT_STATUS_QUOTING: "报价中",
    PROJECT_STATUS_SUBMITTED: "已提交",
    PROJECT_STATUS_ARCHIVED: "已归档",
}

STEP_LABELS = {
    PROJECT_STATUS_PENDING: "确认项目",
    PROJECT_STATUS_DESIGNING: "设计方案",
    PROJECT_STATUS_QUOTING: "检查报价",
    PROJECT_STATUS_SUBMITTED: "提交",
}

# Project sources
PROJECT_SOURCE_CRAWLED = "crawled"
PROJECT_SOURCE_MANUAL = "manual"

# Tender candidate status values
TENDER_STATUS_NEW = "new"
TENDER_STATUS_CONFIRMED = "confirmed"
TENDER_STATUS_IGNORED = "ignored"

# Deadline urgency tiers
URGENCY_EXPIRED = "expired"
URGENCY_URGENT = "urgent"
URGENCY_NORMAL = "normal"

# Placeholders for confirmed tenders with missing fields
PLACEHOLDER_CLIENT = "未知招标方"
PLACEHOLDER_INDUSTRY = "未分类"
PLACEHOLDER_BUDGET = "待定"

# Query suffix appended to every tender search
TENDER_SEARCH_SUFFIX = "招标公告"

# Statuses excluded from active work and upcoming deadlines
CLOSED_STATUSES = (PROJECT_STATUS_SUBMITTED, PROJECT_STATUS_ARCHIVED)
