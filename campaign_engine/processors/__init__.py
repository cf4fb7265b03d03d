"""
Processors — Source-specific pipelines. Pure data logic, no UI.
"""
