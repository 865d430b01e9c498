"""
Centralized constants for the host tree and the stylization engine.

This module consolidates the node type codes, tree walker filter flags and the
markup names the engine relies on. Import from here to ensure consistency.
"""

# =============================================================================
# Node Types
# =============================================================================

# Same numeric codes as the DOM Node.nodeType values
ELEMENT_NODE = 1
TEXT_NODE = 3


# =============================================================================
# Tree Walker Filters
# =============================================================================

# Bit flags accepted by Document.create_tree_walker() (DOM NodeFilter values)
SHOW_ALL = 0xFFFFFFFF
SHOW_ELEMENT = 0x1
SHOW_TEXT = 0x4


# =============================================================================
# Markup
# =============================================================================

# Tag of the inline wrapper element that carries a style class
CONTAINER_TAG = "span"

# Attribute holding the space-separated style labels
CLASS_ATTRIBUTE = "class"

# Payload of a text leaf that only separates lines
LINE_BREAK = "\n"
