from plantprop.services.plant_store import SeedPlantStore, SupabasePlantStore, create_plant_store


class DummyQuery:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.filters = []

    def select(self, fields):
        return self

    def order(self, column):
        self.filters.append(("order", column))
        return self

    def or_(self, expression):
        self.filters.append(("or", expression))
        return self

    def limit(self, n):
        return self

    def execute(self):
        if self.error:
            raise self.error
        return type("Response", (), {"data": self.rows})()


class DummyClient:
    def __init__(self, query):
        self.query = query

    def table(self, name):
        return self.query


ROWS = [
    {"common_name": "Golden Pothos", "scientific_name": "Epipremnum aureum", "optimal_months": [3, 4]},
    {"common_name": "Broken Row", "optimal_months": []},
]


def test_seed_store_loads_bundled_plants():
    store = SeedPlantStore()
    result = store.get_all_plants()
    assert result.is_ok
    ids = [p.id for p in result.value]
    assert "golden-pothos" in ids
    assert "swiss-cheese-plant" in ids
    assert len(ids) == 6


def test_get_plant_by_id_is_case_insensitive():
    store = SeedPlantStore()
    assert store.get_plant_by_id("Snake-Plant").value.common_name == "Snake Plant"
    assert store.get_plant_by_id("not-a-plant").is_empty


def test_search_matches_common_and_scientific_names():
    store = SeedPlantStore()
    assert [p.id for p in store.search_plants("pothos").value] == ["golden-pothos"]
    assert [p.id for p in store.search_plants("FICUS").value] == ["fiddle-leaf-fig"]
    assert store.search_plants("cactus").is_empty
    assert store.search_plants("   ").is_empty


def test_seed_store_skips_unusable_rows():
    store = SeedPlantStore(rows=ROWS)
    assert [p.id for p in store.get_all_plants().value] == ["golden-pothos"]


def test_supabase_store_maps_rows():
    query = DummyQuery(rows=ROWS)
    store = SupabasePlantStore(DummyClient(query))
    result = store.get_all_plants()
    assert result.is_ok
    assert [p.id for p in result.value] == ["golden-pothos"]
    assert ("order", "common_name") in query.filters


def test_supabase_failure_is_distinguishable_from_no_matches():
    store = SupabasePlantStore(DummyClient(DummyQuery(error=RuntimeError("connection refused"))))

    assert store.get_all_plants().is_failed
    assert store.search_plants("pothos").is_failed
    assert store.get_plant_by_id("golden-pothos").is_failed

    empty = SupabasePlantStore(DummyClient(DummyQuery(rows=[])))
    assert empty.search_plants("pothos").is_empty


def test_supabase_search_strips_filter_syntax():
    query = DummyQuery(rows=ROWS[:1])
    SupabasePlantStore(DummyClient(query)).search_plants("po,th(os)%")
    assert ("or", "common_name.ilike.%pothos%,scientific_name.ilike.%pothos%") in query.filters


def test_create_plant_store_falls_back_to_seed_without_credentials():
    store = create_plant_store({"PLANT_SOURCE": "supabase", "SUPABASE_URL": "", "SUPABASE_ANON_KEY": ""})
    assert isinstance(store, SeedPlantStore)
    assert isinstance(create_plant_store({}), SeedPlantStore)


ODD_ROW = {
    "common_name": "Odd Fern",
    "optimal_months": [3],
    "propagation_steps": {"division": [{"step": "one", "title": "Split"}]},
}


def test_seed_store_survives_malformed_rows():
    rows = [ROWS[0], ODD_ROW, {"common_name": 1234, "optimal_months": [5]}, "not a row", None]
    result = SeedPlantStore(rows=rows).get_all_plants()
    assert result.is_ok
    assert [p.id for p in result.value] == ["1234", "golden-pothos", "odd-fern"]


def test_supabase_store_survives_malformed_rows():
    store = SupabasePlantStore(DummyClient(DummyQuery(rows=[ROWS[0], ODD_ROW])))
    result = store.get_all_plants()
    assert result.is_ok
    odd = store.get_plant_by_id("odd-fern").value
    assert odd.propagation_steps["division"][0].step == 1
    assert [p.id for p in result.value] == ["golden-pothos", "odd-fern"]
