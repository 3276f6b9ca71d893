"""
Classroom Hub Comment Bank
==========================

Flask-based comment bank for report-card comment templates.

Structure:
- routes/: API route blueprints
- services/: Tagging, storage, placeholder filling and AI drafting
- config.py: Configuration management
"""

from .config import config, Config

__version__ = "1.0.0"

__all__ = ['config', 'Config']
