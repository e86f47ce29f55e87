"""
Job Portal API
Backend services for the job portal frontend.

Architecture:
- MongoDB GridFS: Uploaded resumes and profile photos
- NewsAPI: Headlines for the news page (pass-through)
- Resend: Contact form delivery
"""

__version__ = "1.0.0"
