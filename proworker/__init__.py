"""
ProWorker assistant: worker analytics snapshots and an LLM chat layer.
"""
__version__ = "1.0.0"
