from beyond_house.content import load_page_content
from beyond_house import models as bh_models
from beyond_house.models import PageContentItem, PortfolioItem, Service, SiteSettings, db


def test_service_add_generates_slug_and_parses_benefits(admin_client, admin_csrf, app):
    response = admin_client.post(
        "/admin/services/add",
        data={
            "_csrf_token": admin_csrf,
            "title": "Lighting Design",
            "description": "Warm, layered lighting.",
            "benefits": "LED strips\n\n  Pendant lights  \n",
            "image_url": "https://cdn.example.com/lighting.jpg",
            "is_visible": "1",
        },
        follow_redirects=False,
    )
    assert response.status_code in (302, 303)
    with app.app_context():
        service = Service.query.filter_by(slug="lighting-design").one()
        assert service.benefits == ["LED strips", "Pendant lights"]
        assert service.display_order == 4
        assert service.is_visible is True

    public = admin_client.get("/services").get_data(as_text=True)
    assert 'id="lighting-design"' in public
    assert "Pendant lights" in public


def test_service_edit_round_trips_benefits_text(admin_client, admin_csrf, app):
    with app.app_context():
        service = Service.query.filter_by(slug="ceiling").one()
        service_id = service.id

    form_page = admin_client.get(f"/admin/services/{service_id}/edit").get_data(as_text=True)
    assert "Custom gypsum ceiling designs\nLED strip and cove lighting integration" in form_page

    response = admin_client.post(
        f"/admin/services/{service_id}/edit",
        data={
            "_csrf_token": admin_csrf,
            "title": "Ceiling Design",
            "description": "Updated description",
            "benefits": "Gypsum\nAcoustic",
            "image_url": "/static/img/portfolio/ceiling-1.jpg",
        },
        follow_redirects=False,
    )
    assert response.status_code in (302, 303)
    with app.app_context():
        service = db.session.get(Service, service_id)
        assert service.benefits == ["Gypsum", "Acoustic"]
        assert service.slug == "ceiling"
        assert service.is_visible is False


def test_service_validation_errors_do_not_save(admin_client, admin_csrf, app):
    response = admin_client.post("/admin/services/add", data={"_csrf_token": admin_csrf, "title": ""})
    assert response.status_code == 200
    assert "Title is required." in response.get_data(as_text=True)

    duplicate = admin_client.post(
        "/admin/services/add", data={"_csrf_token": admin_csrf, "title": "Ceiling", "is_visible": "1"}
    )
    assert duplicate.status_code == 200
    assert "already exists" in duplicate.get_data(as_text=True)

    bad_url = admin_client.post(
        "/admin/services/add",
        data={"_csrf_token": admin_csrf, "title": "Bad Image", "image_url": "javascript:alert(1)"},
    )
    assert bad_url.status_code == 200
    with app.app_context():
        assert Service.query.count() == 4


def test_hidden_service_is_removed_from_public_pages(admin_client, admin_csrf, app):
    with app.app_context():
        service_id = Service.query.filter_by(slug="walls").one().id

    toggled = admin_client.post(f"/admin/services/{service_id}/toggle", data={"_csrf_token": admin_csrf})
    assert toggled.status_code in (302, 303)
    public = admin_client.get("/services").get_data(as_text=True)
    assert 'id="walls"' not in public

    deleted = admin_client.post(f"/admin/services/{service_id}/delete", data={"_csrf_token": admin_csrf})
    assert deleted.status_code in (302, 303)
    with app.app_context():
        assert db.session.get(Service, service_id) is None


def test_hiding_every_service_leaves_public_list_empty(admin_client, admin_csrf, app):
    with app.app_context():
        service_ids = [service.id for service in Service.query.all()]

    for service_id in service_ids:
        admin_client.post(f"/admin/services/{service_id}/toggle", data={"_csrf_token": admin_csrf})
    with app.app_context():
        assert Service.query.filter_by(is_visible=True).count() == 0

    html = admin_client.get("/services").get_data(as_text=True)
    for slug in ("ceiling", "cabinetry", "walls", "floors"):
        assert f'id="{slug}"' not in html


def test_hidden_portfolio_and_testimonials_stay_hidden(client, app):
    with app.app_context():
        PortfolioItem.query.update({"is_visible": False})
        bh_models.Testimonial.query.update({"is_visible": False})
        db.session.commit()
    html = client.get("/").get_data(as_text=True)
    assert "/static/img/portfolio/kitchen-1.jpg" not in html
    assert "Sarah Wanjiku" not in html


def test_public_services_fall_back_to_defaults_when_table_empty(client, app):
    with app.app_context():
        Service.query.delete()
        db.session.commit()
    html = client.get("/services").get_data(as_text=True)
    for slug in ("ceiling", "cabinetry", "walls", "floors"):
        assert f'id="{slug}"' in html


def test_portfolio_save_without_before_image(admin_client, admin_csrf, app):
    response = admin_client.post(
        "/admin/portfolio/add",
        data={
            "_csrf_token": admin_csrf,
            "image_url": "https://cdn.example.com/kitchen.jpg",
            "before_image_url": "https://cdn.example.com/ignored.jpg",
            "title": "Open Kitchen",
            "category": "Kitchens",
            "hover_caption": "Open plan kitchen",
            "is_visible": "1",
        },
        follow_redirects=False,
    )
    assert response.status_code in (302, 303)
    with app.app_context():
        item = PortfolioItem.query.filter_by(title="Open Kitchen").one()
        assert item.is_before_after is False
        assert item.before_image_url is None

    public = admin_client.get("/portfolio?category=Kitchens").get_data(as_text=True)
    assert "Open plan kitchen" in public
    assert "Custom wardrobe" not in public


def test_portfolio_requires_images(admin_client, admin_csrf, app):
    missing_image = admin_client.post(
        "/admin/portfolio/add", data={"_csrf_token": admin_csrf, "title": "No Image"}
    )
    assert missing_image.status_code == 200
    assert "Please upload an image or enter an image URL." in missing_image.get_data(as_text=True)

    missing_before = admin_client.post(
        "/admin/portfolio/add",
        data={
            "_csrf_token": admin_csrf,
            "title": "Half Done",
            "image_url": "https://cdn.example.com/after.jpg",
            "is_before_after": "1",
        },
    )
    assert missing_before.status_code == 200
    with app.app_context():
        assert PortfolioItem.query.filter(PortfolioItem.title.in_(["No Image", "Half Done"])).count() == 0


def test_portfolio_before_after_item(admin_client, admin_csrf, app):
    response = admin_client.post(
        "/admin/portfolio/add",
        data={
            "_csrf_token": admin_csrf,
            "title": "Living Room Makeover",
            "image_url": "https://cdn.example.com/after.jpg",
            "before_image_url": "https://cdn.example.com/before.jpg",
            "is_before_after": "1",
            "is_visible": "1",
        },
    )
    assert response.status_code in (302, 303)
    public = admin_client.get("/portfolio").get_data(as_text=True)
    assert "https://cdn.example.com/before.jpg" in public


def test_testimonial_rating_is_clamped(admin_client, admin_csrf, app):
    response = admin_client.post(
        "/admin/testimonials/add",
        data={
            "_csrf_token": admin_csrf,
            "client_name": "Mercy Atieno",
            "client_role": "Homeowner, Runda",
            "content": "Beautiful work.",
            "rating": "9",
            "is_visible": "1",
        },
    )
    assert response.status_code in (302, 303)
    with app.app_context():
        item = bh_models.Testimonial.query.filter_by(client_name="Mercy Atieno").one()
        assert item.rating == 5
        item_id = item.id

    admin_client.post(
        f"/admin/testimonials/{item_id}/edit",
        data={"_csrf_token": admin_csrf, "client_name": "Mercy Atieno", "content": "Good.", "rating": "0"},
    )
    with app.app_context():
        item = db.session.get(bh_models.Testimonial, item_id)
        assert item.rating == 1
        assert item.is_visible is False

    public = admin_client.get("/").get_data(as_text=True)
    assert "Mercy Atieno" not in public


def test_settings_update_and_validation(admin_client, admin_csrf, app):
    invalid = admin_client.post(
        "/admin/settings",
        data={"_csrf_token": admin_csrf, "company_name": "Beyond House", "email": "not-an-email"},
    )
    assert invalid.status_code == 200
    assert "Please provide a valid email address." in invalid.get_data(as_text=True)

    response = admin_client.post(
        "/admin/settings",
        data={
            "_csrf_token": admin_csrf,
            "company_name": "Beyond House Interiors",
            "location": "Westlands, Nairobi",
            "phone": "0700 111 222",
            "email": "hello@beyondhouse.co.ke",
            "whatsapp": "+254700111222",
            "seo_title": "Beyond House Interiors",
            "seo_description": "Interiors in Nairobi",
            "logo_url": "https://cdn.example.com/logo.png",
            "social_image_url": "",
        },
        follow_redirects=False,
    )
    assert response.status_code in (302, 303)
    with app.app_context():
        settings = SiteSettings.query.one()
        assert settings.location == "Westlands, Nairobi"
        assert settings.social_image_url is None

    public = admin_client.get("/contact").get_data(as_text=True)
    assert "Westlands, Nairobi" in public
    assert "<title>Contact | Beyond House Interiors</title>" in public
    assert "https://cdn.example.com/logo.png" in public


def test_page_content_defaults_without_rows(app):
    with app.app_context():
        content = load_page_content("home")
        assert content.items == []
        assert content.get_value("hero", "heading", "Fallback") == "Fallback"
        assert content.get_json("features", "items", ["x"]) == ["x"]


def test_page_content_blank_text_falls_back_but_empty_lists_are_kept(app):
    with app.app_context():
        db.session.add_all(
            [
                PageContentItem(page="home", section="hero", content_key="heading", content_value=""),
                PageContentItem(page="home", section="features", content_key="items", content_json=[]),
                PageContentItem(page="home", section="hero", content_key="tagline", content_value="Live tagline"),
            ]
        )
        db.session.commit()
        content = load_page_content("home")
        assert content.get_value("hero", "heading", "Default heading") == "Default heading"
        assert content.get_json("features", "items", [{"title": "Default"}]) == []
        assert content.get_value("hero", "tagline", "Default tagline") == "Live tagline"


def test_home_page_manager_saves_content(admin_client, admin_csrf, app):
    form_page = admin_client.get("/admin/home-page")
    assert form_page.status_code == 200
    assert "Beyond House Interior Construction" in form_page.get_data(as_text=True)

    response = admin_client.post(
        "/admin/home-page",
        data={
            "_csrf_token": admin_csrf,
            "hero__heading": "Spaces That Feel Like Home",
            "hero__tagline": "",
            "hero__cta_label": "See Our Work",
            "hero__cta_link": "/portfolio",
            "director__content__name": "Dancan Odhiambo",
            "director__content__role": "Founder",
            "director__content__description1": "Builder.",
            "director__content__description2": "",
            "features__items__title": ["Fast", "", "Tidy"],
            "features__items__description": ["On schedule", "", "Clean sites"],
            "cta__heading": "Let's talk",
            "cta__text": "Call us today.",
        },
        follow_redirects=False,
    )
    assert response.status_code in (302, 303)

    with app.app_context():
        content = load_page_content("home")
        assert content.get_value("hero", "heading") == "Spaces That Feel Like Home"
        assert content.get_json("features", "items") == [
            {"title": "Fast", "description": "On schedule"},
            {"title": "Tidy", "description": "Clean sites"},
        ]
        assert content.get_json("director", "content")["role"] == "Founder"

    home = admin_client.get("/").get_data(as_text=True)
    assert "Spaces That Feel Like Home" in home
    assert "Transforming Your Space Beyond Imagination" in home
    assert "Clean sites" in home


def test_about_page_manager_saves_values(admin_client, admin_csrf):
    response = admin_client.post(
        "/admin/about-page",
        data={
            "_csrf_token": admin_csrf,
            "mission__text": "Deliver calm, beautiful rooms.",
            "values__items__title": ["Care"],
            "values__items__description": ["We sweat the details."],
        },
    )
    assert response.status_code in (302, 303)
    about = admin_client.get("/about").get_data(as_text=True)
    assert "Deliver calm, beautiful rooms." in about
    assert "We sweat the details." in about
    assert "Building Dreams, One Space at a Time" in about


def test_home_page_manager_can_clear_feature_list(admin_client, admin_csrf, app):
    response = admin_client.post("/admin/home-page", data={"_csrf_token": admin_csrf})
    assert response.status_code in (302, 303)

    with app.app_context():
        content = load_page_content("home")
        assert content.get_json("features", "items", ["default"]) == []
        assert content.get_json("director", "content", {"name": "default"}) == {"name": "default"}

    home = admin_client.get("/").get_data(as_text=True)
    assert "Quality Craftsmanship" not in home
    assert "Beyond House Interior Construction" in home
