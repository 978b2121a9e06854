"""Registry of Slovak statutes to ingest and Slov-Lex URL builders."""

from .types import TargetLaw

STATIC_BASE_URL = "https://static.slov-lex.sk/static/SK/ZZ"
PORTAL_BASE_URL = "https://www.slov-lex.sk/ezbierky/pravne-predpisy/SK/ZZ"

TARGET_SLOVAK_LAWS: list[TargetLaw] = [
    TargetLaw(
        id="act-18-2018",
        year=2018,
        number=18,
        seed_file="act-18-2018-data-protection.json",
        title_en="Act No. 18/2018 Coll. on Personal Data Protection",
        short_name="Data Protection Act",
        description="Personal data protection law implementing the GDPR framework in the Slovak Republic.",
    ),
    TargetLaw(
        id="act-69-2018",
        year=2018,
        number=69,
        seed_file="act-69-2018-cybersecurity.json",
        title_en="Act No. 69/2018 Coll. on Cybersecurity",
        short_name="Cybersecurity Act",
        description="Framework law for cybersecurity governance and obligations of entities operating key services and systems.",
    ),
    TargetLaw(
        id="act-452-2021",
        year=2021,
        number=452,
        seed_file="act-452-2021-electronic-communications.json",
        title_en="Act No. 452/2021 Coll. on Electronic Communications",
        short_name="Electronic Communications Act",
        description="Regulates electronic communications networks and services, including rights and obligations of operators.",
    ),
    TargetLaw(
        id="act-22-2004",
        year=2004,
        number=22,
        seed_file="act-22-2004-information-society.json",
        title_en="Act No. 22/2004 Coll. on Electronic Commerce",
        short_name="E-Commerce Act",
        description="Legal framework for selected information society services and electronic commerce obligations.",
    ),
    TargetLaw(
        id="act-211-2000",
        year=2000,
        number=211,
        seed_file="act-211-2000-freedom-of-information.json",
        title_en="Act No. 211/2000 Coll. on Free Access to Information",
        short_name="Freedom of Information Act",
        description="Guarantees access to information held by public authorities and sets conditions for disclosure.",
    ),
    TargetLaw(
        id="act-272-2016",
        year=2016,
        number=272,
        seed_file="act-272-2016-trust-services.json",
        title_en="Act No. 272/2016 Coll. on Trust Services for Electronic Transactions",
        short_name="Trust Services Act",
        description="Regulates trust services and related supervisory mechanisms for electronic transactions.",
    ),
    TargetLaw(
        id="act-300-2005",
        year=2005,
        number=300,
        seed_file="act-300-2005-criminal-code.json",
        title_en="Act No. 300/2005 Coll. Criminal Code",
        short_name="Criminal Code",
        description="Core criminal statute including offences relevant to cybercrime and information systems.",
    ),
    TargetLaw(
        id="act-95-2019",
        year=2019,
        number=95,
        seed_file="act-95-2019-information-technologies.json",
        title_en="Act No. 95/2019 Coll. on Information Technologies in Public Administration",
        short_name="IT Public Administration Act",
        description="Sets governance and requirements for information technologies used in public administration.",
    ),
    TargetLaw(
        id="act-45-2011",
        year=2011,
        number=45,
        seed_file="act-45-2011-critical-infrastructure.json",
        title_en="Act No. 45/2011 Coll. on Critical Infrastructure",
        short_name="Critical Infrastructure Act",
        description="Regulates designation and protection of critical infrastructure elements and related duties.",
    ),
    TargetLaw(
        id="act-513-1991",
        year=1991,
        number=513,
        seed_file="act-513-1991-commercial-code.json",
        title_en="Act No. 513/1991 Coll. Commercial Code",
        short_name="Commercial Code",
        description="Commercial law code governing business entities, commercial obligations, and trade-related rules.",
    ),
]


def get_target_law(law_id: str) -> TargetLaw:
    """Look up a registered law by its stable id."""
    for law in TARGET_SLOVAK_LAWS:
        if law.id == law_id:
            return law
    raise KeyError(f"Unknown law id: {law_id}")


def get_history_url(law: TargetLaw, base_url: str = STATIC_BASE_URL) -> str:
    """History listing URL, e.g. .../SK/ZZ/2018/18/"""
    return f"{base_url.rstrip('/')}/{law.year}/{law.number}/"


def get_version_url(law: TargetLaw, revision_path: str, base_url: str = STATIC_BASE_URL) -> str:
    """Dated version URL, e.g. .../SK/ZZ/2018/18/20180525.html"""
    return f"{get_history_url(law, base_url)}{revision_path.lstrip('/')}"


def get_canonical_portal_url(law: TargetLaw, base_url: str = PORTAL_BASE_URL) -> str:
    """Public Slov-Lex portal URL stored on the parsed act."""
    return f"{base_url.rstrip('/')}/{law.year}/{law.number}/"
