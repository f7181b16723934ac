"""
Services - stores, presence registry, notifications and the submission pipeline.
"""
