"""NiceGUI interface - thin presentation layer for the group chat.

Responsibilities:
    - Message list with own/incoming bubbles and system lines
    - Connection status display
    - Text input, emoji picker and local attachment notices

Each browser tab drives one ChatClient; the page holds no chat state of
its own.
"""
