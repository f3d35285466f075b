"""
Task API subsystem.

Components:
- errors.py: transport failure taxonomy (NetworkError, HttpStatusError, DecodeError)
- transport.py: one HTTP request in, parsed JSON out (httpx)
- query.py: task filters and their query-string encoding
- relations.py: IRI references and the embedded/unresolved/absent relation variant
- models.py: Task, TaskStatus, Project records
- resources.py: TaskService, the domain operations and their failure policies
"""
