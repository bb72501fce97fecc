from readme_builder.domain.profile.schemas import (
    CommitSummary,
    LanguageShare,
    LanguageSummary,
    Profile,
    ProfileReport,
    PullRequestSummary,
    Repository,
)

__all__ = [
    "Profile",
    "Repository",
    "LanguageShare",
    "LanguageSummary",
    "PullRequestSummary",
    "CommitSummary",
    "ProfileReport",
]
