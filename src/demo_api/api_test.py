import pytest
from fastapi.testclient import TestClient

from demo_api.api import MAX_COUNT, app, get_clock


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_clock(value):
    app.dependency_overrides[get_clock] = lambda: (lambda: value)


class TestIsDeadNow:
    """Test suite for the root route"""

    def test_alive(self, client):
        """A timestamp before DEAD reports the wait"""
        use_clock(0xDEAC0)
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {
            "now": 0xDEAC0,
            "dead": False,
            "next_s": 0x10,
            "next_time": 0xDEAD0,
        }

    def test_dead(self, client):
        """A DEAD timestamp has a zero wait"""
        use_clock(0x6DEAD000)
        body = client.get("/").json()
        assert body["dead"] is True
        assert body["next_s"] == 0

    def test_broken_clock(self, client):
        """A clock before the epoch is a service error"""
        use_clock(-1.0)
        assert client.get("/").status_code == 503


class TestCheckRoutes:
    """Test suite for the pattern and DEAD checks"""

    def test_check(self, client):
        """Hex number and pattern"""
        body = client.get("/check/12DEAD34/DEAD").json()
        assert body == {"number_hex": "0x12DEAD34", "pattern_hex": "0xDEAD", "found": True}

    def test_check_lowercase(self, client):
        """Hex digits are case insensitive"""
        assert client.get("/check/abba/bb").json()["found"] is True

    def test_check_bad_hex(self, client):
        """Malformed hex is a client error naming the parameter"""
        response = client.get("/check/xyz/DEAD")
        assert response.status_code == 400
        assert response.json()["detail"].startswith("number:")

    def test_dead_hex(self, client):
        """DEAD in a hex number"""
        assert client.get("/dead_hex/DEAD0").json()["answer"] == "yes"
        assert client.get("/dead_hex/DEAE0").json()["answer"] == "no"

    def test_dead_dec(self, client):
        """DEAD in a decimal number"""
        body = client.get(f"/dead_dec/{0xDEAD}").json()
        assert body == {"number": 0xDEAD, "number_hex": "0xDEAD", "answer": "yes"}

    def test_dead_dec_rejects_hex(self, client):
        """Decimal routes do not accept hex digits"""
        assert client.get("/dead_dec/DEAD").status_code == 400

    def test_out_of_range(self, client):
        """Numbers past u64 are rejected"""
        assert client.get("/dead_hex/10000000000000000").status_code == 400


class TestSearchRoutes:
    """Test suite for the next, matches and ranges routes"""

    def test_next(self, client):
        """Offset and target to the next DEAD"""
        body = client.get("/next/DEAE").json()
        assert body["offset"] == 0xFFFF
        assert body["target_hex"] == "0x1DEAD"

    def test_next_custom_pattern(self, client):
        """Pattern and mask as query parameters"""
        body = client.get("/next/AAAAA", params={"pattern": "ABBA", "mask": "FFFF"}).json()
        assert body["offset"] == 0x110
        assert body["mask_hex"] == "0xFFFF"

    def test_next_none(self, client):
        """Past the last DEAD there is no offset"""
        body = client.get("/next/FFFFFFFFFFFFFFFF").json()
        assert body["offset"] is None
        assert body["target_hex"] is None

    def test_next_narrow_mask(self, client):
        """A mask narrower than the pattern is a client error"""
        assert client.get("/next/0", params={"mask": "FF"}).status_code == 400

    def test_matches(self, client):
        """Successive DEAD values"""
        body = client.get("/matches/0", params={"count": 3}).json()
        assert body["matches"] == ["0xDEAD", "0x1DEAD", "0x2DEAD"]

    def test_matches_count_bounds(self, client):
        """Count is bounded"""
        assert client.get("/matches/0", params={"count": 0}).status_code == 422
        assert client.get("/matches/0", params={"count": MAX_COUNT + 1}).status_code == 422

    def test_ranges(self, client):
        """Runs of DEAD values"""
        body = client.get("/ranges/DEAC0", params={"count": 1}).json()
        assert body["ranges"] == [{"lo": "0xDEAD0", "hi": "0xDEADF", "length": 16}]

    def test_ranges_partial_mask(self, client):
        """Ranges need a full mask"""
        response = client.get("/ranges/0", params={"pattern": "DE0D", "mask": "FF0F"})
        assert response.status_code == 400
        assert "full mask" in response.json()["detail"]
