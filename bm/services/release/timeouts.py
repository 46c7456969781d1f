from __future__ import annotations

# gh auth status
GH_TIMEOUT_SECONDS = 60.0

# gh release create uploads the archive
GH_PUBLISH_TIMEOUT_SECONDS = 15 * 60.0
