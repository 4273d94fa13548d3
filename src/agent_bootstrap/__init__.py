"""
Agents that prompt the OpenAI Chat Completions API and write the results to files.
"""

__version__ = "0.1.0"
