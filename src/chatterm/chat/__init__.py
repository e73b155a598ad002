from .loop import PROMPT, REPLY_LABEL, ChatLoop, ChatState, wire_printer

__all__ = ["ChatLoop", "ChatState", "PROMPT", "REPLY_LABEL", "wire_printer"]
