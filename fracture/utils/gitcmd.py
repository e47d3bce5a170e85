"""Helpers for running git through GitPython."""

import git


def git_error_message(error: git.exc.GitError) -> str:
    """Return the human-readable part of a GitPython error.

    GitCommandError wraps git's stderr as "stderr: '<text>'"; this unwraps it
    so callers can show git's own message.
    """
    if isinstance(error, git.exc.GitCommandError):
        text = (error.stderr or "").strip()
        if text.startswith("stderr:"):
            text = text[len("stderr:"):].strip()
        if len(text) >= 2 and text[0] == text[-1] == "'":
            text = text[1:-1]
        return text.strip()
    return str(error).strip()


def git_output(cwd, *args: str) -> str:
    """Run `git <args>` in cwd and return stripped stdout.

    Raises:
        git.exc.GitError: If git is missing or the command fails
    """
    return git.Git(str(cwd)).execute(["git", *args]).strip()
