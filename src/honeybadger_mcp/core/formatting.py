"""
Plain-text renderers for Honeybadger records.

Pure functions: records in, markdown-ish text out. Backtrace frames are always
rendered in the order upstream supplied them.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

from .models import BacktraceFrame, Fault, Notice, Project

NOT_SPECIFIED = "Not specified"


def _val(value: Any, default: str = "N/A") -> str:
    return default if value is None or value == "" else str(value)


def _status(fault: Fault, ignored_suffix: str = ", Ignored") -> str:
    return fault.status_label + (ignored_suffix if fault.ignored else "")


def _project_label(project: Optional[Project], fault: Fault) -> str:
    if project is not None:
        return _val(project.name)
    return f"ID: {fault.project_id}"


def _frame_lines(frames: Sequence[BacktraceFrame]) -> List[str]:
    return [
        f"{i}. {frame.file}:{frame.number} in `{frame.method}`"
        for i, frame in enumerate(frames, start=1)
    ]


# --- Projects ---


def format_projects_list(projects: Sequence[Project]) -> str:
    blocks = [
        f"## {p.name} (ID: {p.id})\n"
        f"- Faults: {p.fault_count} ({p.unresolved_fault_count} unresolved)\n"
        f"- Environments: {', '.join(p.environments)}\n"
        f"- Last error: {_val(p.last_notice_at, 'Never')}\n"
        for p in projects
    ]
    return "# Honeybadger Projects\n\n" + "\n".join(blocks)


def format_project(
    project: Project, *, title: str = "Project", hint: Optional[str] = None
) -> str:
    lines = [
        f"# {title}: {project.name} (ID: {project.id})",
        "",
        f"- Active: {'Yes' if project.active else 'No'}",
        f"- Created at: {_val(project.created_at)}",
        f"- Environments: {', '.join(project.environments)}",
        f"- Faults: {project.fault_count} "
        f"({project.unresolved_fault_count} unresolved)",
        f"- First notice at: {_val(project.earliest_notice_at, 'Never')}",
        f"- Last notice at: {_val(project.last_notice_at, 'Never')}",
    ]
    if project.owner is not None:
        lines.append(f"- Owner: {project.owner.name} ({project.owner.email})")
    if project.teams:
        lines.append(f"- Teams: {', '.join(_val(t.name) for t in project.teams)}")
    text = "\n".join(lines) + "\n"
    if hint:
        text += f"\n{hint}"
    return text


# --- Faults ---


def _fault_block(fault: Fault, *, with_assignee: bool = True) -> str:
    lines = [
        f"## {fault.klass}: {fault.message} (ID: {fault.id})",
        f"- Environment: {_val(fault.environment, NOT_SPECIFIED)}",
        f"- Status: {_status(fault)}",
        f"- Occurrences: {fault.notices_count}",
        f"- First seen: {_val(fault.created_at)}",
        f"- Last seen: {_val(fault.last_notice_at)}",
    ]
    if with_assignee and fault.assignee is not None:
        lines.append(f"- Assigned to: {fault.assignee.name}")
    return "\n".join(lines) + "\n"


def format_faults_list(faults: Sequence[Fault], *, title: str = "Faults") -> str:
    return f"# {title}\n\n" + "\n\n".join(_fault_block(f) for f in faults)


def format_fault(fault: Fault) -> str:
    lines = [
        f"# Fault: {fault.klass}: {fault.message} (ID: {fault.id})",
        "",
        f"- Project ID: {fault.project_id}",
        f"- Environment: {_val(fault.environment, NOT_SPECIFIED)}",
        f"- Component: {_val(fault.component)}",
        f"- Status: {_status(fault)}",
        f"- Occurrences: {fault.notices_count}",
        f"- First seen: {_val(fault.created_at)}",
        f"- Last seen: {_val(fault.last_notice_at)}",
    ]
    if fault.assignee is not None:
        lines.append(
            f"- Assigned to: {fault.assignee.name} ({fault.assignee.email})"
        )
    if fault.tags:
        lines.append(f"- Tags: {', '.join(fault.tags)}")
    lines.append(f"- URL: {_val(fault.url)}")
    return "\n".join(lines) + "\n"


def format_search_results(faults: Sequence[Fault], project: Project) -> str:
    if not faults:
        return (
            f'No faults found for project "{project.name}" (ID: {project.id}) '
            "with the given criteria."
        )

    blocks = []
    for fault in faults:
        ignored = " (Ignored)" if fault.ignored else ""
        blocks.append(
            f"## [{fault.status_label}{ignored}] {fault.klass}: {fault.message}\n"
            f"- ID: {fault.id}\n"
            f"- Environment: {_val(fault.environment, NOT_SPECIFIED)}\n"
            f"- Occurrences: {fault.notices_count}\n"
            f"- First seen: {_val(fault.created_at)}\n"
            f"- Last seen: {_val(fault.last_notice_at)}\n"
            f"- URL: {_val(fault.url)}\n"
        )
    header = (
        f'# Search Results: Found {len(faults)} faults in "{project.name}" '
        f"(ID: {project.id})\n\n"
    )
    return header + "\n\n".join(blocks)


# --- Notices & backtraces ---


def format_backtrace_frames(frames: Sequence[BacktraceFrame]) -> str:
    if not frames:
        return "- No backtrace available\n"
    nested = "\n".join(f"  - {f.file}:{f.number} in {f.method}" for f in frames)
    return f"- Backtrace:\n{nested}\n"


def format_notices_list(notices: Sequence[Notice]) -> str:
    blocks = []
    for notice in notices:
        block = (
            f"## Notice: {notice.id}\n"
            f"- Created at: {_val(notice.created_at)}\n"
            f"- Message: {_val(notice.message)}\n"
        )
        if notice.request is not None:
            block += f"- URL: {_val(notice.request.url)}\n"
        block += format_backtrace_frames(notice.backtrace)
        blocks.append(block)
    return "# Error Notices\n\n" + "\n\n".join(blocks)


def format_backtraces(
    fault: Fault, notices: Sequence[Notice], project: Optional[Project] = None
) -> str:
    if project is not None:
        project_line = f"{project.name} (ID: {project.id})"
    else:
        project_line = f"ID: {fault.project_id}"

    out = [
        f"# Backtrace for {fault.klass}: {fault.message}",
        f"- Fault ID: {fault.id}",
        f"- Project: {project_line}",
        f"- Environment: {_val(fault.environment, NOT_SPECIFIED)}",
        f"- Status: {_status(fault)}",
        "",
    ]
    for index, notice in enumerate(notices, start=1):
        out.append(f"## Notice {index}: {notice.id}")
        out.append(f"- Created at: {_val(notice.created_at)}")
        request = notice.request
        if request is not None and request.url:
            out.append(f"- URL: {request.url}")
        if request is not None and request.component and request.action:
            out.append(f"- Component/Action: {request.component}#{request.action}")
        out.append("")
        out.append("### Backtrace:")
        if notice.backtrace:
            out.extend(_frame_lines(notice.backtrace))
        else:
            out.append("No backtrace available for this notice.")
        out.append("")
    return "\n".join(out) + "\n"


# --- Prompt bodies ---


def _fault_header(fault: Fault, project: Optional[Project]) -> List[str]:
    return [
        f"PROJECT: {_project_label(project, fault)}",
        f"ERROR TYPE: {fault.klass}",
        f"ERROR MESSAGE: {fault.message}",
    ]


def _fault_facts(fault: Fault) -> List[str]:
    return [
        f"ENVIRONMENT: {_val(fault.environment, NOT_SPECIFIED)}",
        f"COMPONENT: {_val(fault.component, NOT_SPECIFIED)}",
        f"OCCURRENCES: {fault.notices_count}",
        f"FIRST SEEN: {_val(fault.created_at)}",
        f"LAST SEEN: {_val(fault.last_notice_at)}",
    ]


def format_error_analysis_prompt(
    fault: Fault, notice: Optional[Notice], project: Optional[Project] = None
) -> str:
    lines = ["Please analyze the following error and suggest potential fixes:", ""]
    lines += _fault_header(fault, project) + _fault_facts(fault) + [""]

    if notice is not None:
        request = notice.request
        if request is not None and request.url:
            lines.append(f"REQUEST URL: {request.url}")
        if request is not None and request.params:
            lines.append(
                f"REQUEST PARAMETERS: {json.dumps(request.params, indent=2)}"
            )
        if notice.backtrace:
            lines.append("")
            lines.append("BACKTRACE:")
            lines.extend(_frame_lines(notice.backtrace))

    lines += [
        "",
        "Based on the error type, message, and backtrace above:",
        "1. What is likely causing this error?",
        "2. What are potential solutions to fix it?",
        "3. What additional information might be needed to better diagnose "
        "the issue?",
        "",
        "Please provide a detailed analysis with specific code suggestions "
        "if possible.",
    ]
    return "\n".join(lines)


def format_fault_summary_prompt(
    fault: Fault, project: Optional[Project] = None
) -> str:
    lines = ["Please provide a concise summary of the following error:", ""]
    lines += _fault_header(fault, project)
    lines.append(f"STATUS: {_status(fault)}")
    lines += _fault_facts(fault)
    lines += [
        "",
        "Please summarize:",
        "1. What this error means in simple terms",
        "2. Potential causes",
        "3. Common ways to address this type of error",
        "",
        "Keep your summary concise and actionable.",
    ]
    return "\n".join(lines)


__all__ = [
    "format_projects_list",
    "format_project",
    "format_faults_list",
    "format_fault",
    "format_search_results",
    "format_backtrace_frames",
    "format_notices_list",
    "format_backtraces",
    "format_error_analysis_prompt",
    "format_fault_summary_prompt",
]
