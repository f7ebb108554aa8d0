"""
Services for srclink.

- mapping: host declarations to content URLs
- translation: canonical repository URLs
- source_link: content URLs of source roots
- manifest: the source link file
"""
