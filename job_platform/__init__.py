"""
Job Posting Platform
A job-posting API with employer auth and real-time application alerts.

Architecture:
- MongoDB: Employers, jobs, applications
- JWT: Employer identity on mutating job routes
- WebSocket: Best-effort newApplication notifications
"""

__version__ = "1.0.0"
