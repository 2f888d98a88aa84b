"""Keeping the skills section of AGENTS.md in sync with installed skills.

The section uses the openskills layout: a ``<skills_system>`` block wrapping
an HTML-comment delimited table. Files written by older tools may only have
the HTML comments, in which case just the text between them is replaced.
Everything outside the section belongs to the host project and is left
alone.
"""

import re
from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType
from typing import NamedTuple

SECTION_START_PREFIX = "<skills_system"
SECTION_END = "</skills_system>"
TABLE_START_MARKER = "<!-- SKILLS_TABLE_START -->"
TABLE_END_MARKER = "<!-- SKILLS_TABLE_END -->"

DOCUMENT_HEADER = (
    "# AGENTS\n\nThis project uses specialized AI agent skills for development.\n\n"
)

SKILL_DESCRIPTIONS = MappingProxyType(
    {
        "obsidian-dev": "Core development patterns for Obsidian plugins. Load when editing src/main.ts, implementing features, handling API calls, or managing plugin lifecycle.",
        "obsidian-theme-dev": "CSS/SCSS development patterns for Obsidian themes. Load when working with theme.css, SCSS variables, or CSS selectors.",
        "obsidian-ops": "Operations, syncing, versioning, and release management for Obsidian projects. Load when running builds, syncing references, bumping versions, or preparing for release.",
        "obsidian-ref": "Technical references, manifest rules, file formats, and UX guidelines for Obsidian. Load when checking API details, manifest requirements, or UI/UX standards.",
        "project": "Project-specific architecture, maintenance tasks, and unique conventions for this repository. Load when performing project-wide maintenance or working with the core architecture.",
    }
)
DEFAULT_SKILL_DESCRIPTION = "Specialized skill for this project."

_SECTION_RE = re.compile(
    re.escape(SECTION_START_PREFIX) + r"[^>]*>[\s\S]*?" + re.escape(SECTION_END)
)
_WRAPPER_TAG_RE = re.compile(r"<skills_system[^>]*>|</skills_system>")
_TABLE_RE = re.compile(
    re.escape(TABLE_START_MARKER) + r"[\s\S]*?" + re.escape(TABLE_END_MARKER)
)

_SECTION_TEMPLATE = """\
<skills_system priority="1">

## Available Skills

{table_start}
<usage>
When users ask you to perform tasks, check if any of the available skills below can help complete the task more effectively. Skills provide specialized capabilities and domain knowledge.

How to use skills:
- Read skill: `cat ./{agent_dir}/skills/<skill-name>/SKILL.md`
- The skill content will load with detailed instructions on how to complete the task
- Skills are stored locally in ./{agent_dir}/skills/ directory

Usage notes:
- Only use skills listed in <available_skills> below
- Do not invoke a skill that is already loaded in your context
- Each skill invocation is stateless
</usage>

<available_skills>

{skills}

</available_skills>
{table_end}

</skills_system>"""


def render_skill_entry(name: str) -> str:
    """Render one ``<skill>`` entry."""
    description = SKILL_DESCRIPTIONS.get(name, DEFAULT_SKILL_DESCRIPTION)
    return (
        "<skill>\n"
        f"<name>{name}</name>\n"
        f"<description>{description}</description>\n"
        "<location>project</location>\n"
        "</skill>"
    )


def render_skills_section(skills: list[str], agent_dir_name: str) -> str:
    """Render the full ``<skills_system>`` section for the given skills."""
    return _SECTION_TEMPLATE.format(
        table_start=TABLE_START_MARKER,
        table_end=TABLE_END_MARKER,
        agent_dir=agent_dir_name,
        skills="\n\n".join(render_skill_entry(name) for name in skills),
    )


def _replace_section(content: str, section: str) -> str:
    return _SECTION_RE.sub(lambda _: section, content, count=1)


def _table_body(section: str) -> str:
    """Get the text between the table markers of a rendered section."""
    unwrapped = _WRAPPER_TAG_RE.sub("", section)
    _, _, rest = unwrapped.partition(TABLE_START_MARKER)
    body, _, _ = rest.partition(TABLE_END_MARKER)
    return body.strip()


def _replace_table(content: str, section: str) -> str:
    inner = _table_body(section)
    replacement = f"{TABLE_START_MARKER}\n{inner}\n{TABLE_END_MARKER}"
    return _TABLE_RE.sub(lambda _: replacement, content)


def _append_section(content: str, section: str) -> str:
    return content.rstrip() + "\n\n" + section + "\n"


class SpliceRule(NamedTuple):
    """A way of putting the section into an existing document."""

    name: str
    matches: Callable[[str], bool]
    apply: Callable[[str, str], str]


# Checked in order; the first rule that matches is used
SPLICE_RULES: tuple[SpliceRule, ...] = (
    SpliceRule(
        "structured",
        lambda content: SECTION_START_PREFIX in content
        and _SECTION_RE.search(content) is not None,
        _replace_section,
    ),
    SpliceRule(
        "legacy",
        lambda content: TABLE_START_MARKER in content
        and _TABLE_RE.search(content) is not None,
        _replace_table,
    ),
    SpliceRule("append", lambda content: True, _append_section),
)


def splice_section(content: str, section: str) -> tuple[str, str]:
    """Put ``section`` into an existing document.

    Returns the new content and the name of the rule that was applied.
    """
    # The append rule always matches, so there is always a first match
    rule = next(rule for rule in SPLICE_RULES if rule.matches(content))
    return rule.apply(content, section), rule.name


def sync_agents_md(path: Path, skills: list[str], agent_dir_name: str) -> str:
    """Write the skills section into AGENTS.md, creating the file if needed.

    Returns how the section was written: "created", or the name of the
    splice rule used.
    """
    section = render_skills_section(skills, agent_dir_name)

    if path.exists():
        content, strategy = splice_section(path.read_text(encoding="utf-8"), section)
    else:
        content, strategy = DOCUMENT_HEADER + section + "\n", "created"

    path.write_text(content, encoding="utf-8")
    return strategy
