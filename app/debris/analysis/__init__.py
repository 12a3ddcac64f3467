"""Pattern analysis: rule tables, classification, the optional external
agent, and question answering over detected patterns.
"""
