"""
Media app for post picture and video ingestion.

This app provides:
- Declared MIME type and size admission checks
- Per-batch picture/video count ceilings
- FFmpeg video compression
- S3 object storage with rollback of partially written batches
"""
