"""
messages.py

Responsibility: Render the user-facing text printed during a setup run.

Templates are rendered with Jinja2 using StrictUndefined so a missing
variable fails loudly instead of printing a blank.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined

PENDING_CHANGES = """
/!\\ You have some unstaged changes. /!\\
We will take care of adding your changes to the branch: {{ branch }}
"""

COMPLETION_BANNER = """

{{ rule }}

You're all set! Have fun with '{{ workshop_title }}' workshop! ;-)
{% if branch %}
You are on branch {{ branch }} in {{ project_dir }}
{% endif %}
{{ rule }}
"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
)


def render(template: str, **context: Any) -> str:
    return _env.from_string(template).render(**context)


def pending_changes_notice(branch: str) -> str:
    return render(PENDING_CHANGES, branch=branch)


def completion_banner(*, workshop_title: str, branch: str = "", project_dir: str = "", width: int = 88) -> str:
    return render(
        COMPLETION_BANNER,
        rule="*" * width,
        workshop_title=workshop_title,
        branch=branch,
        project_dir=project_dir,
    )


DETACHED_COMMIT = """
Your changes were committed on a detached HEAD as {{ commit }}.
Keep them with: git branch <name> {{ commit }}
"""


def detached_commit_notice(commit: str) -> str:
    return render(DETACHED_COMMIT, commit=commit)
