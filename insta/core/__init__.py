"""
Core of insta.

Holds the two operations made against the container backend:
    - lifecycle orchestration (orchestrator): up and down of project services,
      one batched backend request per operation, outcome re-read from backend state
    - interactive sessions (session): one exec per connect, attached to the caller's terminal

InstaService (service) wires both to the loaded project for the CLI.
Backend commands used by the docker compose backend are described in backend/compose_interface
"""
