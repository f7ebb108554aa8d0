"""
Repository URL grammars.

Recognize the path shapes of hosting services and extract the account,
collection, project, team and repository components.
"""

from .azure_devops import (
    is_visual_studio_hosted_server,
    parse_hosted_http,
    parse_hosted_ssh,
    parse_on_prem_http,
    parse_on_prem_ssh,
    parse_team_foundation_http,
)
from .bitbucket import parse_enterprise_path
from .engine import PathMatch, PathShape, match_path

__all__ = [
    "PathMatch",
    "PathShape",
    "is_visual_studio_hosted_server",
    "match_path",
    "parse_enterprise_path",
    "parse_hosted_http",
    "parse_hosted_ssh",
    "parse_on_prem_http",
    "parse_on_prem_ssh",
    "parse_team_foundation_http",
]
