"""Pydantic models for the GitHub webhook payloads we act on.

Only the fields the handlers read are modelled; everything else in the
payload is ignored. Payload structure (push event, abridged):

{
  "ref": "refs/heads/main",
  "repository": {"name": "repo-name", "full_name": "owner/repo-name"},
  "commits": [
    {
      "id": "abc123",
      "message": "todo: fix bug",
      "author": {"name": "Jane"},
      "added": [], "modified": ["app.py"], "removed": [],
      "url": "https://github.com/owner/repo-name/commit/abc123"
    }
  ]
}
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GitHubEventType(str, Enum):
    """X-GitHub-Event values with a handler."""

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    ISSUES = "issues"


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Repository(_Payload):
    name: str
    full_name: str


class User(_Payload):
    login: str


class CommitAuthor(_Payload):
    name: str


class Commit(_Payload):
    id: str
    message: str
    author: CommitAuthor
    url: str
    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]


class PushEvent(_Payload):
    ref: str
    repository: Repository
    commits: list[Commit] = Field(default_factory=list)


class BranchRef(_Payload):
    ref: str


class PullRequest(_Payload):
    number: int
    title: str
    body: str | None = None
    user: User
    base: BranchRef
    html_url: str
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0


class PullRequestEvent(_Payload):
    action: str
    pull_request: PullRequest
    repository: Repository


class Label(_Payload):
    name: str


class Issue(_Payload):
    number: int
    title: str
    body: str | None = None
    user: User
    labels: list[Label] = Field(default_factory=list)
    html_url: str


class IssuesEvent(_Payload):
    action: str
    issue: Issue
    repository: Repository
