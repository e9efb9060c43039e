"""
Job Finder.

Core components:
- api: FastAPI proxy for job search, CV upload/parse and job scoring
- tools: Adzuna, S3 and signed Lambda endpoint clients
- client: Async controllers for search/pagination and CV upload/scoring
- utils: Upstream payload decoding and terminal display helpers
"""
