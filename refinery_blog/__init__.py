"""
refinery-blog - Blog extension for a Django based CMS.

Features:
- Blog posts with drafts and scheduled publishing dates
- Monthly archives and live/previous post scopes
- Categories and free-text tags
- Comments with optional moderation
- CMS-wide scoped settings store
"""

__version__ = "0.1.0"
