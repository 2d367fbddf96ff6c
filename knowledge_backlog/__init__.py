"""Knowledge Backlog - internal knowledge-article backlog tracker"""

__version__ = "1.0.0"
