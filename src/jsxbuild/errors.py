# src/jsxbuild/errors.py
# Failure taxonomy for the build pipeline. Every error aborts before the live
# document is touched; ``hint`` is what the CLI tells the user to do next.


class BuildError(Exception):
    """Base class for every failure the pipeline reports to the user."""

    hint = ""

    def __init__(self, message: str, hint: str = None):
        super().__init__(message)
        if hint is not None:
            self.hint = hint


class ConfigurationError(BuildError):
    hint = "Check jsxbuild.yaml and the JSXBUILD_* environment variables."


class HostDocumentMissing(BuildError):
    hint = "Are you in the right directory? Pass --input to point at the host document."


class HostDocumentUnreadable(BuildError):
    hint = "The host document and its backup must be readable UTF-8 text."


class DocumentWriteError(BuildError):
    hint = "Check free disk space and write permissions on the document's directory."


class MarkerNotFound(BuildError):
    hint = "The host document needs a <script type=\"text/babel\"> block."


class ClosingMarkerNotFound(BuildError):
    hint = "The embedded script block must be closed with </script>."


class AlreadyCompiledPayload(BuildError):
    hint = "Restore the pristine document (jsxbuild restore) or recreate the backup file."


class CompilerUnavailable(BuildError):
    hint = (
        "Install Node.js 16+ (https://nodejs.org/), e.g. on Debian/Ubuntu: "
        "curl -fsSL https://deb.nodesource.com/setup_20.x | sudo -E bash - && sudo apt install -y nodejs"
    )


class CompilerToolchainMissing(BuildError):
    hint = "Check network access to the npm registry, then run the build again."


class CompilationError(BuildError):
    hint = "Fix the reported syntax error in the embedded script and build again."

    def __init__(self, message: str, diagnostics: str = "", hint: str = None):
        super().__init__(message, hint)
        self.diagnostics = diagnostics


class NoBackupFound(BuildError):
    hint = "Looks like you haven't run a build yet?"
