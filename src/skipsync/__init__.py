# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""skipsync - Skip-segment resolution for video playback."""

from skipsync.__about__ import __version__

__all__ = ["__version__"]
