"""Export presentations to local files through Drive."""

from __future__ import annotations

import logging
from pathlib import Path

from slidemanager.exceptions import LocalWriteError
from slidemanager.transport import Transport

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
PPTX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.presentationml.presentation"
)


async def export_presentation(
    transport: Transport,
    presentation_id: str,
    mime_type: str,
    output_path: str | Path,
) -> Path:
    """Download an export of the presentation and write it verbatim.

    Returns:
        The path written to.
    """
    content = await transport.export_file(presentation_id, mime_type)

    output_path = Path(output_path)
    try:
        output_path.write_bytes(content)
    except OSError as e:
        raise LocalWriteError(str(output_path), e.strerror or str(e)) from e

    logger.debug("Wrote %d bytes to %s", len(content), output_path)
    return output_path
