"""Errors raised by dfx services. The CLI catches DfxError at each interactive step."""


class DfxError(Exception):
    """Base class for every error the session reports to the user."""


class ShellError(DfxError):
    def __init__(self, exit_code: int, stderr: str):
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip() or "no error output"
        super().__init__(f"Git command failed (exit {exit_code}): {detail}")


class NotARepository(DfxError):
    def __init__(self, message: str = "Not a git repository. Please run this command in a git repository."):
        super().__init__(message)


class NoCommits(DfxError):
    def __init__(self, message: str = "No commits found in this repository."):
        super().__init__(message)


class CredentialMissing(DfxError):
    def __init__(self, key_name: str = "GROQ_API_KEY"):
        self.key_name = key_name
        super().__init__(f"{key_name} is not set. Run `dfx setup` to configure it.")


class SummaryServiceError(DfxError):
    """Network failure, non-200 status or malformed body from the inference API."""


class ClipboardError(DfxError):
    pass
