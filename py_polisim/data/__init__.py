"""
Static game data: level tables, ideologies, policy questions, election types.
"""
