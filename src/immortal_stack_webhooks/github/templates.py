"""Markdown task descriptions for GitHub events."""

from __future__ import annotations

from immortal_stack_webhooks.github.events import Commit, Issue, PullRequest, Repository

NO_DESCRIPTION = "No description provided"


def commit_todo_description(repository: Repository, branch: str, commit: Commit) -> str:
    return f"""# TODO from GitHub Commit

**Repository:** {repository.full_name}
**Branch:** {branch}
**Commit:** {commit.id}
**Author:** {commit.author.name}
**Message:**
```
{commit.message}
```

**Changes:**
- Added: {len(commit.added)} files
- Modified: {len(commit.modified)} files
- Removed: {len(commit.removed)} files

**Commit URL:** {commit.url}
"""


def pull_request_description(repository: Repository, pull_request: PullRequest) -> str:
    return f"""# Pull Request Review

**Repository:** {repository.full_name}
**PR Number:** #{pull_request.number}
**Title:** {pull_request.title}
**Author:** {pull_request.user.login}

**Description:**
{pull_request.body or NO_DESCRIPTION}

**Changes:**
- {pull_request.changed_files} files changed
- {pull_request.additions} additions
- {pull_request.deletions} deletions

**PR URL:** {pull_request.html_url}
"""


def issue_description(repository: Repository, issue: Issue) -> str:
    labels = ", ".join(label.name for label in issue.labels)
    return f"""# GitHub Issue

**Repository:** {repository.full_name}
**Issue Number:** #{issue.number}
**Title:** {issue.title}
**Author:** {issue.user.login}

**Description:**
{issue.body or NO_DESCRIPTION}

**Labels:** {labels}

**Issue URL:** {issue.html_url}
"""
