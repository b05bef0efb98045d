from brandkeeper.core.signatures.render import CompanyBrand, SignatureValues, render_signature

TEMPLATE = (
    "<p>{full_name} | {position}</p>"
    "<p>{phone}{phone_extension}</p>"
    "<a href=\"{website}\">{company_name}</a>"
    "<img src=\"{company_logo}\">{unknown_placeholder}"
)
COMPANY = CompanyBrand(name="Acme", logo_url="https://cdn.example.com/acme.png", website="https://acme.example.com")


def test_render_fills_every_known_placeholder():
    html = render_signature(
        TEMPLATE,
        SignatureValues(full_name="Ana Pérez", position="Diseño", phone="55 1234 5678", phone_extension="12"),
        COMPANY,
    )
    assert "<p>Ana Pérez | Diseño</p>" in html
    assert "<p>55 1234 5678 ext. 12</p>" in html
    assert 'href="https://acme.example.com"' in html
    assert 'src="https://cdn.example.com/acme.png"' in html
    assert "{" not in html


def test_render_without_extension_has_no_suffix():
    html = render_signature("{phone}{phone_extension}", SignatureValues(phone="555"), COMPANY)
    assert html == "555"


def test_personal_website_wins_over_company():
    html = render_signature("{website}", SignatureValues(website="https://ana.example.com"), COMPANY)
    assert html == "https://ana.example.com"


def test_values_are_escaped():
    html = render_signature("{full_name}", SignatureValues(full_name='<script>alert("x")</script>'), COMPANY)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_unresolved_placeholders_are_dropped():
    assert render_signature("a{foo}b{bar baz}c", SignatureValues(), CompanyBrand()) == "abc"
