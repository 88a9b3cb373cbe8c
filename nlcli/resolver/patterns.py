"""
Keyword rules that map an instruction to shell commands without any model.

Every rule group is checked on its own and appends its commands in the order
the groups appear below, so one instruction can pick up several groups.
When nothing fires, a short generic list is returned instead.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..utils.schema import RiskLabeledCommand

_DIR_RE = re.compile(r"(?:folder|directory|dir)\s+(?:called|named)?\s*['\"]?([^'\"]+)['\"]?", re.I)
_FILE_RE = re.compile(r"(?:file)\s+(?:called|named)?\s*['\"]?([^'\"]+)['\"]?", re.I)
_SEARCH_RE = re.compile(r"(?:find|search)\s+(?:for)?\s*['\"]?([^'\"]+)['\"]?", re.I)
_PACKAGE_RE = re.compile(r"(?:install|add)\s+(?:package)?\s*['\"]?([^'\"]+)['\"]?", re.I)


def _matches(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)


def _capture(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    if not m:
        return None
    return m.group(1).strip() or None


def extract_directory_name(text: str) -> Optional[str]:
    return _capture(_DIR_RE, text)


def extract_file_name(text: str) -> Optional[str]:
    return _capture(_FILE_RE, text)


def extract_search_term(text: str) -> Optional[str]:
    return _capture(_SEARCH_RE, text)


def extract_package_name(text: str) -> Optional[str]:
    return _capture(_PACKAGE_RE, text)


def _cmd(command: str, description: str, risk: str = "low") -> RiskLabeledCommand:
    return RiskLabeledCommand(command=command, description=description, risk=risk)


FALLBACK_COMMANDS = (
    _cmd("ls -la", "List current directory contents"),
    _cmd("pwd", "Show current directory path"),
    _cmd("help", "Show available commands"),
)


def resolve_with_patterns(instruction: str) -> List[RiskLabeledCommand]:
    text = (instruction or "").lower().strip()
    out: List[RiskLabeledCommand] = []

    # ---------- files and directories ----------
    if _matches(text, ("list", "show", "files", "directory", "dir")):
        out.append(_cmd("ls -la", "List all files and directories with details"))
        out.append(_cmd('find . -type f -name "*" | head -20', "Find and list first 20 files in current directory"))

    if _matches(text, ("create", "make", "new", "folder", "directory")):
        name = extract_directory_name(text) or "new_directory"
        out.append(_cmd(f"mkdir -p {name}", f"Create directory: {name}"))

    # file creation: touch, low risk
    if _matches(text, ("create", "make", "new", "file")):
        name = extract_file_name(text) or "new_file.txt"
        out.append(_cmd(f"touch {name}", f"Create empty file: {name}"))

    if _matches(text, ("delete", "remove", "rm")):
        if _matches(text, ("directory", "folder")):
            name = extract_directory_name(text) or "directory"
            out.append(_cmd(f"rm -rf {name}", f"Delete directory and all contents: {name}", "high"))
        elif _matches(text, ("file",)):
            name = extract_file_name(text) or "filename"
            out.append(_cmd(f"rm {name}", f"Delete file: {name}", "medium"))

    # ---------- git ----------
    if _matches(text, ("git", "status", "check")):
        out.append(_cmd("git status", "Show git repository status"))

    if _matches(text, ("git", "add", "stage")):
        out.append(_cmd("git add .", "Stage all changes for commit"))
        out.append(_cmd("git add -A", "Stage all changes including deletions"))

    if _matches(text, ("git", "commit")):
        out.append(_cmd('git commit -m "Update"', "Commit staged changes with generic message"))

    if _matches(text, ("git", "push")):
        out.append(_cmd("git push origin main", "Push commits to main branch", "medium"))
        out.append(_cmd("git push", "Push commits to current branch", "medium"))

    if _matches(text, ("git", "pull")):
        out.append(_cmd("git pull origin main", "Pull latest changes from main branch", "medium"))
        out.append(_cmd("git pull", "Pull latest changes from current branch", "medium"))

    # ---------- system ----------
    if _matches(text, ("current", "directory", "where", "location")):
        out.append(_cmd("pwd", "Show current directory path"))

    if _matches(text, ("disk", "space", "usage", "size")):
        out.append(_cmd("df -h", "Show disk space usage"))
        out.append(_cmd("du -sh *", "Show size of files and directories"))

    if _matches(text, ("processes", "running", "tasks")):
        out.append(_cmd("ps aux", "Show all running processes"))
        out.append(_cmd("top", "Show real-time process activity"))

    if _matches(text, ("find", "search")):
        term = extract_search_term(text) or "search_term"
        out.append(_cmd(f'find . -name "*{term}*"', f"Find files containing: {term}"))
        out.append(_cmd(f'grep -r "{term}" .', f"Search for text in files: {term}"))

    # ---------- packages and project scripts ----------
    if _matches(text, ("install", "npm", "pnpm", "package")):
        name = extract_package_name(text) or "package_name"
        out.append(_cmd(f"pnpm install {name}", f"Install package: {name}", "medium"))

    if _matches(text, ("run", "start", "dev", "serve")):
        out.append(_cmd("pnpm run dev", "Start development server"))
        out.append(_cmd("pnpm start", "Start application"))

    if _matches(text, ("build", "compile")):
        out.append(_cmd("pnpm run build", "Build the application"))

    if not out:
        return list(FALLBACK_COMMANDS)
    return out
