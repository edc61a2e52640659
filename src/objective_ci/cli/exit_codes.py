"""Exit codes for the objective-ci CLI.

- 0: Success (every requested step ran; tool exit codes are not inspected)
- 2: A tool report could not be post-processed
- 3: Invalid usage (bad arguments, missing required options, bad config)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_REPORT_ERROR = 2
EXIT_INVALID_USAGE = 3
