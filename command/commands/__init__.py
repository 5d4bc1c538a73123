"""
Built-in command responders.
"""
