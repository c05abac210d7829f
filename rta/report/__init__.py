from rta.report.markdown import render_job_markdown

__all__ = ["render_job_markdown"]
