import pytest
from protean.integrations.pytest import DomainFixture

from tailoring.media import reset_cdn


@pytest.fixture(scope="session")
def tailoring_bed():
    from tailoring.domain import tailoring

    bed = DomainFixture(tailoring)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(tailoring_bed):
    with tailoring_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
        reset_cdn()


# ---------------------------------------------------------------------------
# Persisted catalogue items and users
# ---------------------------------------------------------------------------
@pytest.fixture()
def add_item():
    from protean import current_domain

    from tailoring.catalogue.management import AddCatalogItem

    def _add(kind="design", name="Classic Panjabi", category="Panjabi", price=40.0, image_url=None):
        return current_domain.process(
            AddCatalogItem(
                kind=kind,
                name=name,
                category=category,
                price=price,
                image_url=image_url or f"https://cdn.example.test/{kind}/{name.lower().replace(' ', '-')}.jpg",
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def design_id(add_item):
    return add_item(kind="design", name="Classic Panjabi", category="Panjabi", price=40.0)


@pytest.fixture()
def fabric_id(add_item):
    return add_item(kind="fabric", name="Egyptian Cotton", category="Cotton", price=25.0)


@pytest.fixture()
def register():
    from protean import current_domain

    from tailoring.people.registration import RegisterUser

    def _register(name, email, role="customer", phone="01712345678", **extra):
        return current_domain.process(
            RegisterUser(name=name, email=email, role=role, phone=phone, **extra),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def customer_id(register):
    return register("Rahim Uddin", "rahim@example.com", address="House 12, Road 5, Dhanmondi, Dhaka")


@pytest.fixture()
def tailor_id(register):
    return register("Karim Master", "karim@example.com", role="tailor", experience=12, specialization="Panjabi")


@pytest.fixture()
def admin_id(register):
    return register("Admin", "admin@example.com", role="admin")
