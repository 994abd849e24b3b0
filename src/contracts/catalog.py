"""Fixed catalogues: event types, MITRE techniques, sources, filter options.

Filter option lists start with the ``"All"`` wildcard; lists that also
carry ``"NA"`` let the user select records where the field is missing.
"""

from __future__ import annotations

from src.contracts.enums import GroupByKey, Severity

ALL = "All"
NA = "NA"

EVENT_TYPES: list[str] = [
    "Authentication Events",
    "File and Object Access Events",
    "System Events",
    "User Activity Events",
    "Network Events",
    "Configuration and Change Events",
    "Audit Events",
    "Behavioral Events",
]

EVENT_NAMES: dict[str, list[str]] = {
    "Authentication Events": [
        "Login Success", "Login Failed", "MFA Triggered", "Password Reset", "Session Expired",
    ],
    "File and Object Access Events": [
        "File Downloaded", "File Uploaded", "Object Deleted", "Permission Changed",
    ],
    "System Events": ["Service Restart", "CPU Spike", "Memory Alert", "Disk Full"],
    "User Activity Events": [
        "Profile Updated", "Account Created", "Role Changed", "API Key Generated",
    ],
    "Network Events": [
        "Port Scan Detected", "DNS Query Anomaly", "Lateral Movement", "C2 Communication",
    ],
    "Configuration and Change Events": [
        "Policy Updated", "Firewall Rule Changed", "Config Backup", "Agent Deployed",
    ],
    "Audit Events": [
        "Compliance Check", "Access Review", "Audit Log Export", "Policy Violation",
    ],
    "Behavioral Events": [
        "Anomalous Login", "Data Exfiltration", "Privilege Escalation", "Unusual Process",
    ],
}

SEVERITIES: list[str] = [s.value for s in Severity]

SOURCES: list[str] = ["NDR", "WAF", "DLP", "DAM", "SIEM", "SOAR", "UEBA"]

INCIDENT_TYPES: list[str] = [
    "Brute Force Attack",
    "Data Breach",
    "Malware Infection",
    "Insider Threat",
    "Phishing Campaign",
    "Ransomware",
    "DDoS Attack",
    "Unauthorized Access",
    "Privilege Escalation",
    "Supply Chain Attack",
]

# technique id -> display name
MITRE_TECHNIQUES: dict[str, str] = {
    "T1110": "Brute Force",
    "T1566": "Phishing",
    "T1059": "Command and Scripting",
    "T1071": "Application Layer Protocol",
    "T1082": "System Information Discovery",
    "T1083": "File and Directory Discovery",
    "T1018": "Remote System Discovery",
    "T1021": "Remote Services",
    "T1053": "Scheduled Task/Job",
    "T1027": "Obfuscated Files",
    "T1105": "Ingress Tool Transfer",
    "T1036": "Masquerading",
    "T1547": "Boot or Logon Autostart",
    "T1078": "Valid Accounts",
}

MITRE_IDS: list[str] = list(MITRE_TECHNIQUES)

# labels as shown in the rule editor, e.g. "T1110 - Brute Force"
MITRE_LABELS: list[str] = [f"{tid} - {name}" for tid, name in MITRE_TECHNIQUES.items()]

GROUP_BY_OPTIONS: list[str] = [g.value for g in GroupByKey]

HOSTNAMES: list[str] = [
    "web-server-01", "db-primary-02", "fw-edge-01", "ids-sensor-03",
    "mail-server-01", "app-server-04", "proxy-01", "dns-resolver-02",
]

LOG_TEMPLATES: list[str] = [
    "Failed password for root from {ip} port 22 ssh2",
    "Accepted publickey for admin from {ip} port 443",
    "Connection closed by {ip} [preauth]",
    "firewalld: ACCEPT_INPUT: IN=eth0 SRC={ip} DST=10.0.0.1 PROTO=TCP",
    "kernel: [UFW BLOCK] IN=eth0 OUT= SRC={ip} DST=10.0.0.5 PROTO=UDP",
    "sshd: pam_unix(sshd:auth): authentication failure; rhost={ip}",
    "nginx: access_log - {ip} - GET /api/v1/users 200",
    "systemd: Started Session 1452 of user admin",
    "auditd: USER_AUTH pid=3421 uid=0 auid=1000 msg=op=PAM:authentication",
    "snort: [1:2100498:7] GPL ATTACK_RESPONSE id check returned root from {ip}",
]

RULE_NAMES: list[str] = [
    "Brute Force Detection",
    "Lateral Movement Alert",
    "Privilege Escalation Rule",
    "Data Exfiltration Monitor",
    "Suspicious Login Pattern",
    "Multi-Source Correlation",
    "Anomalous File Access",
    "Network Scan Detection",
    "Insider Threat Indicator",
    "Ransomware Behavior",
    "C2 Communication Alert",
    "Failed Auth Spike",
    "Config Change Anomaly",
    "Audit Log Tampering",
    "Account Compromise",
]

USERNAMES: list[str] = ["admin", "analyst01", "soc_lead", "security_ops", "threat_hunter"]

# ── filter option lists ─────────────────────────────────────────────────────

CORRELATED = "Correlated Events"
ISOLATED = "Isolated Events"

EVENT_TYPE_OPTIONS: list[str] = [ALL, NA, *EVENT_TYPES]
SEVERITY_OPTIONS: list[str] = [ALL, NA, *SEVERITIES]
SOURCE_OPTIONS: list[str] = [ALL, *SOURCES]
INCIDENT_TYPE_OPTIONS: list[str] = [ALL, *INCIDENT_TYPES]
EVENT_COUNT_FILTER_OPTIONS: list[str] = [ALL, CORRELATED, ISOLATED]
