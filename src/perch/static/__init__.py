"""Static content — MIME resolution, path sanitizing, file serving.

Every path that is neither a direct nor a dynamic route ends up here.
"""
