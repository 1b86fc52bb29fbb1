"""Release publishing workflow.

- model: apps, releases, build outputs
- api / http_client: remote release service
- preconditions, resolver, build, confirm, publish, status: workflow stages
- workflow: stage sequencing and failure policy
"""

from __future__ import annotations
