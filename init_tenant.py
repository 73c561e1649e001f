"""
Seed a demo tenant.

Creates the Acme Corporation tenant with an administrator and a default signature template so
a fresh installation has something to log in to.
"""
import asyncio
import os

from signature_studio.infrastructure.database import get_session, init_db
from signature_studio.modules.auth.models import RegistrationInput
from signature_studio.modules.auth.service import AuthService
from signature_studio.modules.templates.models import TemplateCreateInput, TemplateStatus
from signature_studio.modules.templates.service import SignatureTemplateService
from signature_studio.modules.tenants.models import Plan
from signature_studio.modules.tenants.service import TenantService

DEMO_DOMAIN = "acme.com"
DEMO_EMAIL = "john.admin@acme.com"


async def create_demo_tenant() -> None:
    await init_db()
    password = os.environ.get("DEMO_ADMIN_PASSWORD", "Password123")

    async for db in get_session():
        tenants = TenantService.with_session(db)
        if await tenants.get_by_domain(DEMO_DOMAIN) is not None:
            print("Demo tenant already exists, nothing to do")
            return

        session = await AuthService.with_session(db).register_tenant(
            RegistrationInput(
                organization_name="Acme Corporation",
                domain=DEMO_DOMAIN,
                email=DEMO_EMAIL,
                password=password,
                first_name="John",
                last_name="Smith",
            )
        )
        tenant = await tenants.change_plan(session.tenant.id, Plan.PROFESSIONAL)

        await SignatureTemplateService.with_session(db).create_template(
            tenant,
            session.user.id,
            TemplateCreateInput(
                name="Acme Corporate Standard",
                content={
                    "fullName": "John Smith",
                    "jobTitle": "CEO",
                    "company": "Acme Corporation",
                    "email": DEMO_EMAIL,
                    "website": "https://www.acme.com",
                },
                formatting="corporate",
                status=TemplateStatus.ACTIVE,
                is_default=True,
            ),
        )
        await db.commit()

        print("=" * 50)
        print("Demo tenant created")
        print("=" * 50)
        print(f"Domain:   {DEMO_DOMAIN}")
        print(f"Email:    {DEMO_EMAIL}")
        print(f"Password: {password}")
        print("=" * 50)
        print("Change the password after the first login!")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_demo_tenant())
