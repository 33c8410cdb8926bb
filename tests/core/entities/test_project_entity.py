"""Tests for the project entity and its lifecycle."""

import pytest

from siteledger.core.entities import Project, ProjectStatus


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (ProjectStatus.PENDING, ProjectStatus.ACTIVE, True),
        (ProjectStatus.PENDING, ProjectStatus.CANCELLED, True),
        (ProjectStatus.PENDING, ProjectStatus.COMPLETED, False),
        (ProjectStatus.ACTIVE, ProjectStatus.COMPLETED, True),
        (ProjectStatus.ACTIVE, ProjectStatus.CANCELLED, True),
        (ProjectStatus.COMPLETED, ProjectStatus.ACTIVE, False),
        (ProjectStatus.CANCELLED, ProjectStatus.ACTIVE, False),
    ],
)
def test_can_transition_to(current, target, allowed):
    project = Project(project_id="PRJ-1", name="Duplex", status=current)
    assert project.can_transition_to(target) is allowed


def test_new_project_is_pending():
    project = Project(project_id="PRJ-1", name="Duplex")
    assert project.status is ProjectStatus.PENDING
    assert project.confirmed_at is None
