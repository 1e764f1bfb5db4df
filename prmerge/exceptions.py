"""prmerge exception classes."""


class PRMergeError(Exception):
    """Base exception for all prmerge errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PRMergeError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


# ============================================================================
# Domain errors
# ============================================================================


class InvalidInputError(PRMergeError):
    """Raised when an algorithm is handed unusable input (no commits, no merge commit)."""

    def __init__(self, message: str, code: str = "INVALID_INPUT") -> None:
        super().__init__(code, message)


class MissingRepositoryError(InvalidInputError):
    """Raised when the repository of a pull request could not be resolved."""

    def __init__(self, owner: str, name: str, number: int | None = None) -> None:
        self.owner = owner
        self.name = name
        self.number = number
        what = f"pull request #{number}" if number is not None else "pull request"
        super().__init__(f"{what} has no repository ({owner}/{name})", code="MISSING_REPOSITORY")


class FetchFailedError(PRMergeError):
    """
    Raised when fetching data from the hosting platform fails.

    The underlying transport error is kept as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        sha: str | None = None,
    ) -> None:
        self.resource = resource
        self.sha = sha
        super().__init__("FETCH_FAILED", message)


class EmptyCommitError(PRMergeError):
    """Raised when the platform answers successfully but without a commit payload."""

    def __init__(self, sha: str) -> None:
        self.sha = sha
        super().__init__("EMPTY_COMMIT", f"commit returned empty when querying sha {sha}")


class PatchTreeNotFoundError(PRMergeError):
    """Raised when no parent of a merge commit carries the PR's final tree."""

    def __init__(self, parents_examined: int, merge_commit_sha: str | None = None) -> None:
        self.parents_examined = parents_examined
        self.merge_commit_sha = merge_commit_sha
        super().__init__(
            "PATCH_TREE_NOT_FOUND",
            f"unable to find patch tree of merge commit among {parents_examined} parents",
        )


class CancelledError(PRMergeError):
    """Raised when an in-flight fetch is aborted by the caller's cancel signal."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__("CANCELLED", message)


# ============================================================================
# Transport errors
# ============================================================================


class AuthenticationError(PRMergeError):
    """Raised when the token is missing, invalid or expired (401)."""

    pass


class AuthorizationError(PRMergeError):
    """Raised when access is denied (403)."""

    pass


class NotFoundError(PRMergeError):
    """Raised when a resource is not found."""

    pass


class RateLimitedError(PRMergeError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(PRMergeError):
    """Raised on validation errors (422 and other client errors) and on malformed API payloads."""

    pass


class ServerError(PRMergeError):
    """Raised on server errors (5xx) and connection failures."""

    pass
