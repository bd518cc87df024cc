import pytest

from supamock import EmulatorSettings, SupabaseEmulator, VirtualScheduler


@pytest.fixture
def settings() -> EmulatorSettings:
    return EmulatorSettings(_env_file=None)


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def client(settings: EmulatorSettings, scheduler: VirtualScheduler) -> SupabaseEmulator:
    return SupabaseEmulator(settings=settings, scheduler=scheduler)


@pytest.fixture
def people(client: SupabaseEmulator) -> SupabaseEmulator:
    client.set_table_data(
        "people",
        [
            {"id": 1, "name": "Ada", "age": 36, "tags": ["math", "engines"], "team": "core"},
            {"id": 2, "name": "Brian", "age": 52, "tags": ["unix"], "team": "core"},
            {"id": 3, "name": "carol", "age": 29, "tags": [], "team": None},
            {"id": 4, "name": "Dennis", "age": 70, "tags": ["unix", "c"], "team": "labs"},
        ],
    )
    return client
