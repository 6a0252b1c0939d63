"""Error hierarchy for export failures.

Missing page structure and malformed individual items are NOT errors: the
extractors report them as diagnostics and return an empty or partial result.
Exceptions are reserved for the caller-side concerns around the engine:
rendering saved pages and delivering the exported text.

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(2))
    async def render_saved_page(path: Path) -> str:
        ...
"""


class ExportError(Exception):
    """Base exception for all export errors."""

    pass


class TransientError(ExportError):
    """Temporary failure that may succeed on retry.

    Examples: headless browser timing out while rendering a saved page.
    """

    pass


class PermanentError(ExportError):
    """Failure that won't succeed on retry.

    Examples: input file missing, page is neither a timetable nor a calendar.
    """

    pass


class DeliveryError(PermanentError):
    """Writing the exported text to a file or to the clipboard stream failed.

    The export result itself is unaffected and can be delivered again.
    """

    pass
