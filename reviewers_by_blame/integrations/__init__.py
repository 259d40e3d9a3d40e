"""
Integrations with external systems (Git, GitHub).
"""
