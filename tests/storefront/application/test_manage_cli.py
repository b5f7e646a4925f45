"""Tests for the management CLI."""

import pytest
from protean import current_domain

import manage
from storefront.customer.customer import Customer
from storefront.customer.registration import SyncCustomer
from storefront.domain import storefront


@pytest.fixture(autouse=True)
def initialized_domain(monkeypatch):
    # The test bed has already initialized the domain
    monkeypatch.setattr(manage, "bootstrap", lambda: storefront)


def _register(email):
    return current_domain.process(
        SyncCustomer(external_id=f"uid-{email}", email=email, first_name="Asha"),
        asynchronous=False,
    )


class TestMakeAdmin:
    def test_promotes_existing_customer(self):
        customer_id = _register("asha@example.com")

        manage.main(["make-admin", "--email", "Asha@Example.com"])

        assert current_domain.repository_for(Customer).get(customer_id).is_admin

    def test_unknown_email_exits_with_error(self, capsys):
        _register("asha@example.com")

        with pytest.raises(SystemExit) as exc:
            manage.main(["make-admin", "--email", "nobody@example.com"])

        assert exc.value.code == 1
        assert "No customer registered with nobody@example.com" in capsys.readouterr().out

    def test_other_customers_are_untouched(self):
        asha = _register("asha@example.com")
        ravi = _register("ravi@example.com")

        manage.main(["make-admin", "--email", "ravi@example.com"])

        repo = current_domain.repository_for(Customer)
        assert repo.get(ravi).is_admin
        assert not repo.get(asha).is_admin
