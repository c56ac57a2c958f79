"""
Posts app for antenna build posts.

A post is committed from domain fields plus the object keys returned by the
media upload endpoint. The keys are re-verified against the object store
before anything is written.
"""
