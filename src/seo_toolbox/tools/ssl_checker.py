"""SSL/TLS certificate and configuration report for a domain.

The vendor is asked to assess the certificate, protocols and security headers
from what it knows about the host. The fallback synthesizes a plausible
domain-validated certificate and then derives the grade, vulnerabilities,
recommendations and compliance flags from it with the same rules a live check
would apply.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..fallback.fields import Choice, Const, Derived, Flag, Hex, IntRange, Obj, Text
from .base import Tool

# Browsers cap public certificate lifetimes at 398 days
MAX_CERT_DAYS = 398


class SslParams(BaseModel):
    port: int = Field(443, ge=1, le=65535)


class CertSubject(BaseModel):
    common_name: str
    organization: str
    organizational_unit: str
    locality: str
    state: str
    country: str

class CertIssuer(BaseModel):
    common_name: str
    organization: str
    country: str

class Validity(BaseModel):
    not_before: str
    not_after: str
    days_remaining: int
    is_expired: bool
    is_valid: bool

class Fingerprints(BaseModel):
    sha1: str
    sha256: str
    md5: str

class PublicKey(BaseModel):
    algorithm: str
    size: int = Field(..., gt=0)
    exponent: str

class Extensions(BaseModel):
    subject_alternative_names: List[str]
    key_usage: List[str]
    extended_key_usage: List[str]
    basic_constraints: str
    authority_key_identifier: str
    subject_key_identifier: str

class Certificate(BaseModel):
    subject: CertSubject
    issuer: CertIssuer
    validity: Validity
    fingerprints: Fingerprints
    public_key: PublicKey
    signature_algorithm: str
    version: int
    serial_number: str
    extensions: Extensions

class ProtocolSupport(BaseModel):
    tls_1_0: bool
    tls_1_1: bool
    tls_1_2: bool
    tls_1_3: bool
    ssl_3_0: bool
    ssl_2_0: bool

class CipherSuite(BaseModel):
    name: str
    strength: str
    key_exchange: str
    authentication: str
    encryption: str
    mac: str

class Vulnerability(BaseModel):
    name: str
    severity: str
    description: str
    recommendation: str

class Hsts(BaseModel):
    enabled: bool
    max_age: int = Field(..., ge=0)
    include_subdomains: bool
    preload: bool

class CertificateTransparency(BaseModel):
    enabled: bool
    logs_count: int = Field(..., ge=0)

class OcspStapling(BaseModel):
    enabled: bool
    status: str

class SecurityAnalysis(BaseModel):
    overall_grade: str
    protocol_support: ProtocolSupport
    cipher_suites: List[CipherSuite]
    vulnerabilities: List[Vulnerability]
    hsts: Hsts
    certificate_transparency: CertificateTransparency
    ocsp_stapling: OcspStapling

class ChainAnalysis(BaseModel):
    chain_length: int = Field(..., ge=0)
    root_ca: str
    intermediate_cas: List[str]
    chain_issues: List[str]
    trusted: bool

class HandshakeTiming(BaseModel):
    handshake_time: float = Field(..., ge=0)
    connection_time: float = Field(..., ge=0)
    total_time: float = Field(..., ge=0)

class SslRecommendation(BaseModel):
    category: str
    priority: str
    issue: str
    solution: str

class Compliance(BaseModel):
    pci_dss: bool
    hipaa: bool
    gdpr: bool
    fips_140_2: bool

class SslReport(BaseModel):
    domain: str
    port: int
    ssl_enabled: bool
    certificate: Certificate
    security_analysis: SecurityAnalysis
    chain_analysis: ChainAnalysis
    performance: HandshakeTiming
    recommendations: List[SslRecommendation]
    compliance: Compliance


def security_grade(is_valid: bool, days_remaining: int, key_size: int, hsts_enabled: bool,
                   ssl_enabled: bool = True) -> str:
    """Start from 100 and deduct for validity, key size and a missing HSTS header."""
    if not ssl_enabled:
        return "F"
    score = 100
    if not is_valid:
        score -= 50
    elif days_remaining < 30:
        score -= 20
    if key_size < 2048:
        score -= 30
    elif key_size < 4096:
        score -= 10
    if not hsts_enabled:
        score -= 15

    if score >= 95:
        return "A+"
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    if score >= 60:
        return "D"
    return "F"


def assess(report: Dict) -> Dict:
    """
    Fill the judgement fields of a report from its certificate, HSTS and timing data.
    Returns the same dict.
    """
    cert = report["certificate"]
    validity = cert["validity"]
    key = cert["public_key"]
    security = report["security_analysis"]
    hsts = security["hsts"]
    vulnerabilities: List[Dict] = []
    recommendations: List[Dict] = []

    if not validity["is_valid"]:
        vulnerabilities.append({
            "name": "Invalid Certificate",
            "severity": "critical",
            "description": "The SSL certificate is not valid (expired or not yet valid)",
            "recommendation": "Renew or replace the SSL certificate immediately",
        })
        recommendations.append({
            "category": "Security",
            "priority": "critical",
            "issue": "Invalid SSL certificate",
            "solution": "Renew or replace the SSL certificate",
        })
    elif validity["days_remaining"] < 30:
        vulnerabilities.append({
            "name": "Certificate Expiring Soon",
            "severity": "high",
            "description": f"Certificate expires in {validity['days_remaining']} days",
            "recommendation": "Renew the certificate before it expires",
        })
        recommendations.append({
            "category": "Security",
            "priority": "high",
            "issue": "Certificate expiring soon",
            "solution": "Set up automatic certificate renewal",
        })

    if key["size"] < 2048:
        vulnerabilities.append({
            "name": "Weak Key Size",
            "severity": "high",
            "description": f"Key size is {key['size']} bits, which is considered weak",
            "recommendation": "Use at least 2048-bit RSA or 256-bit ECDSA keys",
        })
        recommendations.append({
            "category": "Security",
            "priority": "high",
            "issue": "Weak encryption key size",
            "solution": "Generate a new certificate with stronger key size",
        })

    if not hsts["enabled"]:
        recommendations.append({
            "category": "Security",
            "priority": "medium",
            "issue": "HSTS not enabled",
            "solution": "Enable HTTP Strict Transport Security (HSTS) headers",
        })

    if report["performance"]["handshake_time"] > 1000:
        recommendations.append({
            "category": "Performance",
            "priority": "medium",
            "issue": "Slow SSL handshake",
            "solution": "Optimize SSL configuration and consider using ECDSA certificates",
        })

    security["overall_grade"] = security_grade(
        validity["is_valid"], validity["days_remaining"], key["size"], hsts["enabled"], report["ssl_enabled"]
    )
    security["vulnerabilities"] = vulnerabilities
    security["cipher_suites"] = [{
        "name": "TLS_AES_256_GCM_SHA384" if security["protocol_support"]["tls_1_3"]
                else "ECDHE-RSA-AES256-GCM-SHA384",
        "strength": "strong" if key["size"] >= 2048 else "weak",
        "key_exchange": "ECDHE",
        "authentication": key["algorithm"],
        "encryption": "AES",
        "mac": "SHA256",
    }]
    report["chain_analysis"] = {
        "chain_length": 2,
        "root_ca": cert["issuer"]["organization"] or "Unknown CA",
        "intermediate_cas": [cert["issuer"]["common_name"] or "Unknown"],
        "chain_issues": ["Certificate validation issues detected"] if vulnerabilities else [],
        "trusted": validity["is_valid"],
    }
    report["recommendations"] = recommendations
    report["compliance"] = {
        "pci_dss": validity["is_valid"] and key["size"] >= 2048,
        "hipaa": validity["is_valid"] and hsts["enabled"],
        "gdpr": validity["is_valid"],
        "fips_140_2": key["size"] >= 2048,
    }
    return report


def _not_after(days_remaining: int, today: Optional[date] = None) -> date:
    return (today or date.today()) + timedelta(days=days_remaining)


_ISSUERS = [
    {"common_name": "R11", "organization": "Let's Encrypt", "country": "US"},
    {"common_name": "Sectigo RSA Domain Validation Secure Server CA", "organization": "Sectigo Limited",
     "country": "GB"},
    {"common_name": "DigiCert Global G2 TLS RSA SHA256 2020 CA1", "organization": "DigiCert Inc",
     "country": "US"},
]

FALLBACK = Obj({
    "domain": Text("{domain}"),
    "port": Derived(lambda report, ctx: ctx["port"]),
    "ssl_enabled": Const(True),
    "certificate": Obj({
        "subject": Obj({
            "common_name": Text("{domain}"),
            "organization": Const(""),
            "organizational_unit": Const(""),
            "locality": Const(""),
            "state": Const(""),
            "country": Const(""),
        }),
        "issuer": Choice(_ISSUERS),
        # A small share of certificates come out already expired
        "validity": Obj({
            "days_remaining": IntRange(-15, 380),
            "not_after": Derived(lambda v, ctx: _not_after(v["days_remaining"]).isoformat()),
            "not_before": Derived(
                lambda v, ctx: (_not_after(v["days_remaining"]) - timedelta(days=MAX_CERT_DAYS)).isoformat()
            ),
            "is_expired": Derived(lambda v, ctx: v["days_remaining"] < 0),
            "is_valid": Derived(lambda v, ctx: v["days_remaining"] >= 0),
        }),
        "fingerprints": Obj({"sha1": Hex(20), "sha256": Hex(32), "md5": Hex(16)}),
        "public_key": Obj({
            "algorithm": Const("RSA"),
            "size": Choice([2048, 2048, 4096]),
            "exponent": Const("0x10001"),
        }),
        "signature_algorithm": Const("sha256WithRSAEncryption"),
        "version": Const(3),
        "serial_number": Hex(16, sep=""),
        "extensions": Obj({
            "subject_alternative_names": Derived(lambda ext, ctx: [ctx["domain"], f"www.{ctx['domain']}"]),
            "key_usage": Const(["Digital Signature", "Key Encipherment"]),
            "extended_key_usage": Const(["TLS Web Server Authentication", "TLS Web Client Authentication"]),
            "basic_constraints": Const("CA:FALSE"),
            "authority_key_identifier": Hex(20),
            "subject_key_identifier": Hex(20),
        }),
    }),
    "security_analysis": Obj({
        "protocol_support": Obj({
            "tls_1_0": Const(False),
            "tls_1_1": Const(False),
            "tls_1_2": Const(True),
            "tls_1_3": Flag(0.8),
            "ssl_3_0": Const(False),
            "ssl_2_0": Const(False),
        }),
        "hsts": Obj({
            "enabled": Flag(0.6),
            "max_age": Derived(lambda hsts, ctx: 31536000 if hsts["enabled"] else 0),
            "include_subdomains": Derived(lambda hsts, ctx: hsts["enabled"]),
            "preload": Const(False),
        }),
        "certificate_transparency": Obj({"enabled": Const(True), "logs_count": IntRange(2, 2)}),
        "ocsp_stapling": Const({"enabled": False, "status": "not_checked"}),
    }),
    "performance": Obj({
        "handshake_time": IntRange(50, 250),
        "connection_time": IntRange(20, 100),
        "total_time": Derived(lambda perf, ctx: perf["handshake_time"] + perf["connection_time"]),
    }),
})


class SslCheckerTool(Tool):
    def fallback(self, ctx, rng=None):
        return assess(super().fallback(ctx, rng))


TOOL = SslCheckerTool(
    name="ssl-checker",
    description="Certificate details, protocol support, security grade and compliance for a domain",
    subject_kind="domain",
    template="ssl_checker",
    result_model=SslReport,
    fallback=FALLBACK,
    params_model=SslParams,
)
