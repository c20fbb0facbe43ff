"""Admin back-office: access control, overview and the managers."""
import json

import httpx
import pytest
from conftest import TRAVELLER, sign_in

BOOKINGS = [
    {"id": "5", "customerName": "Asha Rao", "serviceType": "PACKAGE", "serviceId": "2", "serviceName": "Goa Beaches",
     "date": "2030-01-10", "status": "PENDING", "amount": 100, "paymentStatus": "Unpaid", "userId": "u1"},
    {"id": "6", "user": {"name": "Ravi"}, "serviceType": "TAXI", "date": "2030-01-11", "status": "Confirmed",
     "amount": "oops"},
    {"id": "7", "serviceType": "HOTEL", "date": "2030-01-12", "status": "pending", "amount": "50.5"},
]


class TestAccess:
    def test_anonymous_sent_to_admin_login(self, client):
        r = client.get("/admin", follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/admin-login"

    def test_traveller_sent_to_admin_login(self, client, backend):
        sign_in(client, backend, TRAVELLER)
        r = client.get("/admin/packages", follow_redirects=False)
        assert r.headers["location"] == "/admin-login"

    def test_unknown_manager(self, admin_client):
        assert admin_client.get("/admin/spaceships").status_code == 404


class TestOverview:
    def test_stats(self, admin_client, backend):
        backend.on("GET", "/bookings", BOOKINGS)
        r = admin_client.get("/admin")
        assert r.status_code == 200
        assert '<strong id="total-revenue">$150.50</strong>' in r.text
        assert '<strong id="total-bookings">3</strong>' in r.text
        assert '<strong id="pending-requests">2</strong>' in r.text
        assert "Asha Rao" in r.text
        assert "Ravi" in r.text

    def test_non_finite_amount_counts_as_zero(self, admin_client, backend):
        backend.on("GET", "/bookings", [{**BOOKINGS[0], "amount": "NaN"}, {**BOOKINGS[2], "amount": 10}])
        r = admin_client.get("/admin")
        assert r.status_code == 200
        assert '<strong id="total-revenue">$10</strong>' in r.text


class TestCatalogManagers:
    def test_list_one_row_per_record(self, admin_client, backend):
        backend.on("GET", "/hotels", [{"id": 1, "name": "Lake View"}, {"id": 2, "name": "Old Town Inn"}])
        r = admin_client.get("/admin/hotels")
        assert r.text.count('class="item-row"') == 2
        assert 'action="/admin/hotels/2/delete"' in r.text

    def test_new_form_shows_fields(self, admin_client):
        r = admin_client.get("/admin/taxis/new")
        for name in ("name", "type", "price_per_km", "base_fare", "capacity", "image", "features"):
            assert f'name="{name}"' in r.text
        assert 'name="image_file"' in r.text

    def test_create_taxi_posts_json(self, admin_client, backend):
        backend.on("POST", "/taxis", {"taxi": {"id": 9}}, status=201).on("GET", "/taxis", [])
        r = admin_client.post("/admin/taxis/new", data={
            "name": "Hill SUV", "type": "SUV", "price_per_km": "18", "base_fare": "80", "capacity": "6",
            "features": "AC\nRoof rack",
        })
        assert r.url.path == "/admin/taxis"
        assert "Taxi saved." in r.text
        sent = backend.last_json("POST", "/taxis")
        assert sent["name"] == "Hill SUV"
        assert sent["type"] == "SUV"
        assert sent["pricePerKm"] == 18
        assert sent["baseFare"] == 80
        assert sent["capacity"] == 6
        assert sent["features"] == ["AC", "Roof rack"]

    def test_create_package_is_multipart_with_image(self, admin_client, backend):
        backend.on("POST", "/packages", {"id": 3}, status=201).on("GET", "/packages", [])
        admin_client.post(
            "/admin/packages/new",
            data={"title": "Everest Base Camp", "price": "2400", "days": "14", "itinerary": "Lukla\nNamche"},
            files={"image_file": ("ebc.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        request = backend.sent("POST", "/packages")[-1]
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="title"' in body and b"Everest Base Camp" in body
        assert b'name="days"' in body and b"14" in body
        assert json.dumps(["Lukla", "Namche"]).encode() in body
        assert b'filename="ebc.jpg"' in body
        assert not backend.sent("POST", "/upload")

    def test_edit_prefills_form(self, admin_client, backend):
        backend.on("GET", "/homestays/4", {"id": 4, "name": "Mountain Nest", "amenities": ["Wifi", "Meals"]})
        r = admin_client.get("/admin/homestays/4/edit")
        assert 'value="Mountain Nest"' in r.text
        assert "Wifi\nMeals" in r.text
        assert 'action="/admin/homestays/4/edit"' in r.text

    def test_edit_missing_record(self, admin_client):
        r = admin_client.get("/admin/homestays/404/edit")
        assert r.status_code == 404
        assert "Homestay not found" in r.text

    def test_update_uploads_new_image(self, admin_client, backend):
        backend.on("POST", "/upload", {"imageUrl": "/uploads/lake.jpg"})
        backend.on("PUT", "/hotels/1", {"id": 1}).on("GET", "/hotels", [])
        admin_client.post(
            "/admin/hotels/1/edit",
            data={"name": "Lake View", "price_per_night": "95"},
            files={"image_file": ("lake.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        sent = backend.last_json("PUT", "/hotels/1")
        assert sent["image"] == "/uploads/lake.jpg"
        assert sent["pricePerNight"] == 95

    def test_save_failure_keeps_form(self, admin_client, backend):
        backend.on("POST", "/blogs", {"message": "Title already used"}, status=409)
        r = admin_client.post("/admin/blogs/new", data={"title": "Packing light", "tags": "gear, tips"})
        assert r.status_code == 502
        assert "Failed to save post: Title already used" in r.text
        assert 'value="Packing light"' in r.text

    def test_blog_requires_title(self, admin_client, backend):
        r = admin_client.post("/admin/blogs/new", data={"title": ""})
        assert r.status_code == 400
        assert not backend.sent("POST", "/blogs")

    def test_non_finite_price_rejected(self, admin_client, backend):
        r = admin_client.post("/admin/packages/new", data={"title": "Everest Base Camp", "price": "inf"})
        assert r.status_code == 400
        assert not backend.sent("POST", "/packages")

    def test_delete(self, admin_client, backend):
        backend.on("DELETE", "/taxis/3", None, status=204).on("GET", "/taxis", [])
        r = admin_client.post("/admin/taxis/3/delete")
        assert r.url.path == "/admin/taxis"
        assert "Taxi deleted." in r.text
        assert backend.sent("DELETE", "/taxis/3")

    def test_delete_failure_flashes(self, admin_client, backend):
        backend.on("DELETE", "/taxis/3", {"message": "In use"}, status=409).on("GET", "/taxis", [])
        r = admin_client.post("/admin/taxis/3/delete")
        assert "Failed to delete taxi: In use" in r.text


class TestBookings:
    def test_list(self, admin_client, backend):
        backend.on("GET", "/bookings", {"bookings": BOOKINGS})
        r = admin_client.get("/admin/bookings")
        assert r.text.count('class="item-row"') == 3

    def test_detail(self, admin_client, backend):
        backend.on("GET", "/bookings/5", BOOKINGS[0])
        r = admin_client.get("/admin/bookings/5")
        assert "Goa Beaches" in r.text
        assert "Asha Rao" in r.text

    def test_status_change_puts_whole_booking(self, admin_client, backend):
        backend.on("GET", "/bookings/5", {"booking": BOOKINGS[0]})
        backend.on("PUT", "/bookings/5", {"id": "5"}).on("GET", "/bookings", [])
        r = admin_client.post("/admin/bookings/5/status", data={"status": "Confirmed"})
        assert r.url.path == "/admin/bookings"
        sent = backend.last_json("PUT", "/bookings/5")
        assert sent["status"] == "Confirmed"
        assert sent["serviceName"] == "Goa Beaches"
        assert sent["amount"] == 100
        assert sent["paymentStatus"] == "Unpaid"

    def test_payment_change_returns_to_detail(self, admin_client, backend):
        backend.on("GET", "/bookings/5", BOOKINGS[0]).on("PUT", "/bookings/5", {"id": "5"})
        r = admin_client.post(
            "/admin/bookings/5/payment",
            data={"payment_status": "Paid", "next": "/admin/bookings/5"},
            follow_redirects=False,
        )
        assert r.headers["location"] == "/admin/bookings/5"
        assert backend.last_json("PUT", "/bookings/5")["paymentStatus"] == "Paid"

    def test_external_next_ignored(self, admin_client, backend):
        backend.on("GET", "/bookings/5", BOOKINGS[0]).on("PUT", "/bookings/5", {"id": "5"})
        r = admin_client.post(
            "/admin/bookings/5/status",
            data={"status": "Cancelled", "next": "https://evil.example/"},
            follow_redirects=False,
        )
        assert r.headers["location"] == "/admin/bookings"

    def test_status_failure(self, admin_client, backend):
        backend.on("GET", "/bookings/5", BOOKINGS[0]).on("GET", "/bookings", BOOKINGS)
        backend.on("PUT", "/bookings/5", {"message": "Locked"}, status=423)
        r = admin_client.post("/admin/bookings/5/status", data={"status": "Cancelled"})
        assert "Failed to update status: Locked" in r.text

    def test_payment_failure_names_payment_status(self, admin_client, backend):
        backend.on("GET", "/bookings/5", BOOKINGS[0]).on("GET", "/bookings", BOOKINGS)
        backend.on("PUT", "/bookings/5", {"message": "Locked"}, status=423)
        r = admin_client.post("/admin/bookings/5/payment", data={"payment_status": "Paid"})
        assert "Failed to update payment status: Locked" in r.text

    def test_fetch_failure_flashed(self, admin_client, backend):
        backend.on("GET", "/bookings/5", {"message": "boom"}, status=500).on("GET", "/bookings", [])
        r = admin_client.post("/admin/bookings/5/status", data={"status": "Confirmed"})
        assert r.url.path == "/admin/bookings"
        assert "Failed to update status: boom" in r.text
        assert not backend.sent("PUT", "/bookings/5")

    def test_missing_booking_flashed(self, admin_client, backend):
        backend.on("GET", "/bookings/5", {"message": "Not found"}, status=404).on("GET", "/bookings", [])
        r = admin_client.post("/admin/bookings/5/payment", data={"payment_status": "Paid"})
        assert r.url.path == "/admin/bookings"
        assert "Failed to update payment status:" in r.text
        assert not backend.sent("PUT", "/bookings/5")

    def test_unknown_status_rejected(self, admin_client, backend):
        backend.on("GET", "/bookings", [])
        admin_client.post("/admin/bookings/5/status", data={"status": "Teleported"})
        assert not backend.sent("PUT", "/bookings/5")


class TestUsers:
    USERS = [
        {"id": "a1", "name": "Admin User", "email": "admin@example.com", "role": "ADMIN"},
        {"id": "u1", "name": "Asha Rao", "email": "asha@example.com", "role": "user"},
    ]

    def test_list_hides_self_delete(self, admin_client, backend):
        backend.on("GET", "/users", self.USERS)
        r = admin_client.get("/admin/users")
        assert r.text.count('class="item-row"') == 2
        assert 'action="/admin/users/u1/delete"' in r.text
        assert 'action="/admin/users/a1/delete"' not in r.text

    def test_role_change(self, admin_client, backend):
        backend.on("PUT", "/users/u1", {"id": "u1"}).on("GET", "/users", self.USERS)
        r = admin_client.post("/admin/users/u1/role", data={"role": "admin"})
        assert "User role updated." in r.text
        assert backend.last_json("PUT", "/users/u1") == {"role": "admin"}

    def test_delete(self, admin_client, backend):
        backend.on("DELETE", "/users/u1", {"message": "deleted"}).on("GET", "/users", self.USERS)
        r = admin_client.post("/admin/users/u1/delete")
        assert "User deleted." in r.text

    def test_cannot_delete_self(self, admin_client, backend):
        backend.on("GET", "/users", self.USERS)
        r = admin_client.post("/admin/users/a1/delete")
        assert "You cannot delete your own account." in r.text
        assert not backend.sent("DELETE", "/users/a1")


class TestSettings:
    def test_defaults_without_saved_row(self, admin_client, backend):
        backend.on("GET", "/settings", {})
        r = admin_client.get("/admin/settings")
        assert 'value="Wanderlust"' in r.text

    def test_saved_row_shown(self, admin_client, backend):
        backend.on("GET", "/settings", {"id": 1, "siteName": "Trailhead", "logo": "/uploads/logo.png"})
        r = admin_client.get("/admin/settings")
        assert 'value="Trailhead"' in r.text

    def test_save_with_logo_upload(self, admin_client, backend):
        backend.on("POST", "/upload", {"imageUrl": "/uploads/new-logo.png"})
        backend.on("PUT", "/settings", {"id": 1}).on("GET", "/settings", {})
        r = admin_client.post(
            "/admin/settings",
            data={"site_name": "Trailhead", "favicon": "/favicon.ico"},
            files={"logo_file": ("logo.png", b"png-bytes", "image/png")},
        )
        assert "Settings saved successfully!" in r.text
        assert backend.last_json("PUT", "/settings") == {
            "siteName": "Trailhead", "logo": "/uploads/new-logo.png", "favicon": "/favicon.ico",
        }


class TestProfile:
    def test_mismatch(self, admin_client, backend):
        r = admin_client.post("/admin/profile", data={"new_password": "a", "confirm_password": "b"})
        assert r.status_code == 400
        assert "New passwords don&#39;t match!" in r.text
        assert not backend.sent("PUT", "/users/a1")

    def test_update(self, admin_client, backend):
        backend.on("PUT", "/users/a1", {"id": "a1"})
        r = admin_client.post("/admin/profile", data={"name": "Head Admin", "email": "admin@example.com"})
        assert "Profile updated successfully!" in r.text
        assert 'value="Head Admin"' in r.text
        assert backend.last_json("PUT", "/users/a1") == {
            "name": "Head Admin", "email": "admin@example.com", "avatar": "",
        }


@pytest.mark.parametrize("path", ["/admin/bookings", "/admin/users", "/admin/settings", "/admin/profile"])
def test_pages_render_for_admin(admin_client, backend, path):
    backend.on("GET", "/bookings", []).on("GET", "/users", []).on("GET", "/settings", {})
    assert admin_client.get(path).status_code == 200


def test_backend_unreachable_lists_render_empty(admin_client, backend):
    def down(request):
        raise httpx.ConnectError("refused", request=request)

    backend.on("GET", "/packages", down)
    r = admin_client.get("/admin/packages")
    assert r.status_code == 200
    assert "No tour packages yet." in r.text
