"""
Exit codes for the vcsstate CLI.

Standardized exit codes following Unix conventions with semantic meaning.

Exit Code Semantics:
  0: Success - command completed successfully
  1: Not Found - no remote configured, remote repository missing
  2: Usage Error - bad flags, invalid inputs, missing required args
  3: Config Error - invalid or unreadable configuration
  4: Tool Error - git failed or produced output we could not parse
  5: Prerequisite Error - git not installed, unsupported git version
  6: Not Contained - `contains` answered no (the revision is not in the branch)
  130: Cancelled - user cancelled operation (SIGINT)

Note: Click/Typer argument parsing errors (EXIT_USAGE) occur before
commands run, so they emit to stderr without JSON envelope.
"""

# Success
EXIT_SUCCESS = 0

EXIT_NOT_FOUND = 1  # No origin remote, repository not found on remote
EXIT_USAGE = 2  # Invalid usage/arguments (Click default)
EXIT_CONFIG = 3  # Config error
EXIT_TOOL = 4  # git failed or its output was malformed
EXIT_PREREQ = 5  # git missing or too old to identify
EXIT_NOT_CONTAINED = 6  # contains: revision is not an ancestor of the branch

# Cancellation (SIGINT convention)
EXIT_CANCELLED = 130

# Map exception types to exit codes
EXIT_CODE_MAP = {
    "NoRemoteError": EXIT_NOT_FOUND,
    "RepositoryNotFoundError": EXIT_NOT_FOUND,
    "NoCachedDefaultBranchError": EXIT_NOT_FOUND,
    "MalformedOutputError": EXIT_TOOL,
    "CommandError": EXIT_TOOL,
    "ConfigError": EXIT_CONFIG,
    "GitNotFoundError": EXIT_PREREQ,
    "UnsupportedGitVersionError": EXIT_PREREQ,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """Return the appropriate exit code for an exception type.

    Walk up the exception's MRO to find a matching type in EXIT_CODE_MAP.
    Fall back to EXIT_TOOL if no specific mapping exists.
    """
    for cls in type(exc).__mro__:
        if cls.__name__ in EXIT_CODE_MAP:
            return EXIT_CODE_MAP[cls.__name__]

    return EXIT_TOOL
