"""
Status → display metadata for the presentation layer (badge icon, style classes).
Both mappings are total over WordStatus.
"""
from typing import Union

from .models import WordStatus

STATUS_ICONS = {
    WordStatus.CORRECT: "✅",
    WordStatus.PARTIAL: "⚠️",
    WordStatus.WRONG: "❌",
    WordStatus.MISSED: "⭕",
    WordStatus.EXTRA: "➕",
}

STATUS_CLASSES = {
    WordStatus.CORRECT: "bg-green-100 text-green-800 border-green-300",
    WordStatus.PARTIAL: "bg-amber-100 text-amber-800 border-amber-300",
    WordStatus.WRONG: "bg-red-100 text-red-800 border-red-300",
    WordStatus.MISSED: "bg-gray-100 text-gray-500 border-gray-300 line-through",
    WordStatus.EXTRA: "bg-purple-100 text-purple-800 border-purple-300",
}


def status_icon(status: Union[WordStatus, str]) -> str:
    """Icon token for a word status. Raises ValueError for a non-status string."""
    return STATUS_ICONS[WordStatus(status)]


def status_style_class(status: Union[WordStatus, str]) -> str:
    """Style-class token for a word status. Raises ValueError for a non-status string."""
    return STATUS_CLASSES[WordStatus(status)]
