"""
Logging utilities for tracking visitor activity across the site.
"""

from flask import request
from app.models import LogEntry
from app import db


def log_project_visit(project_name, project_display_name=None):
    """
    Log a visit to a project/page.
    
    Args:
        project_name (str): The project identifier (e.g., 'calculator')
        project_display_name (str, optional): Human-readable name for the description.
                                              Defaults to project_name if not provided.
    """
    display_name = project_display_name or project_name
    visitor = request.remote_addr or "unknown address"
    
    log_project_event(project_name, 'Visit', f"Visitor from {visitor} visited {display_name}")


def log_project_event(project_name, category, description):
    """
    Record an activity log entry for a project.
    
    Args:
        project_name (str): The project identifier
        category (str): Short event category (e.g., 'Visit', 'Error')
        description (str): Free-text description of what happened
    """
    log_entry = LogEntry(
        project=project_name,
        category=category,
        description=description
    )
    db.session.add(log_entry)
    db.session.commit()
