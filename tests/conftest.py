import logging
import pytest
from pathlib import Path

from ticketcluster.core_types import Ticket

# Define project root for path fixtures
repo_root = Path(__file__).resolve().parent.parent

# Roughly 1 km of longitude along the equator
KM_IN_DEGREES = 1 / 111.195

@pytest.fixture(scope="session")
def mini_yaml():
    """Path to the minimal YAML config for integration tests"""
    return repo_root / "tests" / "_assets" / "smoke" / "mini.yaml"

@pytest.fixture(scope="session")
def mini_tickets_csv():
    """Path to the minimal ticket CSV for integration tests"""
    return repo_root / "tests" / "_assets" / "smoke" / "mini_tickets.csv"

@pytest.fixture(scope="session")
def jira_search_json():
    """Path to an exported JIRA search result"""
    return repo_root / "tests" / "_assets" / "smoke" / "jira_search.json"

@pytest.fixture(autouse=True)
def tmp_results_dir(tmp_path, monkeypatch):
    """Redirect the project's results directory into a temp folder"""
    fake_results = tmp_path / "results"
    fake_results.mkdir()
    monkeypatch.setenv("PROJECT_RESULTS_DIR", str(fake_results))
    # Relative asset paths in configs are resolved from the project root
    monkeypatch.chdir(repo_root)
    return fake_results

@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI entry points reconfigure the root logger; undo that after each test"""
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)

@pytest.fixture
def street_tickets():
    """Ten tickets about 28 m apart along a Manhattan street."""
    priorities = ['High', 'Medium', 'Low']
    return [
        Ticket(
            id=str(i + 1),
            lat=40.7128 + 0.0002 * i,
            lng=-74.0060 + 0.0002 * i,
            priority=priorities[i % 3] if i != 9 else 'High',
            extra={'title': f'Ticket {i + 1}'}
        )
        for i in range(10)
    ]

@pytest.fixture
def tight_group_with_outlier():
    """Five tickets within a few hundred meters plus one ticket ~50 km away."""
    base_lat, base_lng = 51.5074, -0.1278
    offsets = [(0.0, 0.0), (0.001, 0.0), (0.0, 0.001), (0.002, 0.0), (0.0, 0.003)]
    tickets = [
        Ticket(id=f"G{i + 1}", lat=base_lat + dlat, lng=base_lng + dlng)
        for i, (dlat, dlng) in enumerate(offsets)
    ]
    tickets.append(Ticket(id="OUT", lat=base_lat + 0.45, lng=base_lng))
    return tickets

@pytest.fixture
def equator_line():
    """Three tickets on the equator, 1 km apart, Critical one at the far end."""
    return [
        Ticket(id="L1", lat=0.0, lng=0.0, priority="Low"),
        Ticket(id="L2", lat=0.0, lng=KM_IN_DEGREES, priority="Low"),
        Ticket(id="C", lat=0.0, lng=2 * KM_IN_DEGREES, priority="Critical"),
    ]
