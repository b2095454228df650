"""Built-in cybersecurity question bank used to seed an empty database.

Each entry is ``(question, (A, B, C, D), correct_letter)``.
"""

_EASY = [
    (
        "What is phishing?",
        (
            "A fraudulent attempt to obtain sensitive information by posing as a trusted party",
            "A type of computer hardware",
            "A method of backing up files",
            "A secure way to share passwords",
        ),
        "A",
    ),
    (
        "Which of these is the strongest password?",
        ("password123", "JohnSmith1990", "Tr0ub4dor&3!kX9#", "qwerty"),
        "C",
    ),
    (
        "What does the padlock icon in a browser address bar indicate?",
        (
            "The website is government approved",
            "The connection to the website is encrypted",
            "The website has no advertisements",
            "The website cannot be hacked",
        ),
        "B",
    ),
    (
        "What should you do with an unexpected email attachment from an unknown sender?",
        (
            "Open it to see what it is",
            "Forward it to your colleagues",
            "Reply asking who they are",
            "Do not open it and report it",
        ),
        "D",
    ),
    (
        "What is two-factor authentication?",
        (
            "Using two different passwords",
            "Logging in from two devices",
            "Verifying identity with two different types of evidence",
            "Having two user accounts",
        ),
        "C",
    ),
    (
        "Why should you install software updates promptly?",
        (
            "They often fix security vulnerabilities",
            "They make the screen brighter",
            "They delete old files",
            "They are required to use the internet",
        ),
        "A",
    ),
    (
        "What is malware?",
        (
            "A faulty keyboard",
            "Software designed to harm or exploit a system",
            "A slow internet connection",
            "An email filter",
        ),
        "B",
    ),
    (
        "Which network is the riskiest for online banking?",
        (
            "Your home network with WPA3",
            "Your mobile data connection",
            "A public Wi-Fi hotspot without a password",
            "Your office network",
        ),
        "C",
    ),
    (
        "What should you do before leaving your computer unattended?",
        (
            "Turn up the volume",
            "Lock the screen",
            "Close the browser tabs",
            "Unplug the mouse",
        ),
        "B",
    ),
    (
        "Is it safe to reuse the same password across many websites?",
        (
            "Yes, if it is long",
            "Yes, if it contains numbers",
            "Only for social media",
            "No, one breach exposes every account",
        ),
        "D",
    ),
    (
        "What is a password manager?",
        (
            "A tool that securely stores and generates passwords",
            "A person who resets passwords",
            "A browser extension that blocks ads",
            "A type of antivirus",
        ),
        "A",
    ),
]

_MEDIUM = [
    (
        "What is social engineering?",
        (
            "Designing social media platforms",
            "Manipulating people into revealing confidential information",
            "Engineering software in teams",
            "Building secure networks",
        ),
        "B",
    ),
    (
        "What does ransomware do?",
        (
            "Speeds up your computer",
            "Shows unwanted advertisements",
            "Encrypts your files and demands payment",
            "Steals your Wi-Fi bandwidth",
        ),
        "C",
    ),
    (
        "What is a VPN primarily used for?",
        (
            "Encrypting traffic between your device and a remote network",
            "Increasing download speed",
            "Blocking all malware",
            "Storing passwords",
        ),
        "A",
    ),
    (
        "What is spear phishing?",
        (
            "Phishing using fishing-themed emails",
            "Mass spam sent to random addresses",
            "Phishing over phone calls only",
            "A targeted phishing attack aimed at a specific person or organization",
        ),
        "D",
    ),
    (
        "What is the main purpose of a firewall?",
        (
            "To cool down the server",
            "To filter network traffic according to security rules",
            "To back up data",
            "To encrypt hard drives",
        ),
        "B",
    ),
    (
        "What is smishing?",
        (
            "Phishing carried out through SMS text messages",
            "Smashing hardware to destroy data",
            "A type of firewall",
            "Encrypting email messages",
        ),
        "A",
    ),
    (
        "What is the principle of least privilege?",
        (
            "Give everyone administrator rights",
            "Give users only the access they need to do their job",
            "Remove all access after one year",
            "Share accounts among team members",
        ),
        "B",
    ),
    (
        "Which of these is a sign that a website link may be malicious?",
        (
            "It uses HTTPS",
            "It is short and readable",
            "Its domain is slightly misspelled compared to a known brand",
            "It belongs to a search engine",
        ),
        "C",
    ),
    (
        "What is a botnet?",
        (
            "A chatbot for customer support",
            "A network for robotic devices",
            "A secure corporate network",
            "A network of compromised computers controlled by an attacker",
        ),
        "D",
    ),
    (
        "Why is public USB charging at airports considered risky?",
        (
            "It charges too slowly",
            "Compromised ports can transfer data or malware",
            "It damages the battery",
            "It is not risky at all",
        ),
        "B",
    ),
    (
        "What is tailgating in physical security?",
        (
            "Following an authorized person into a restricted area",
            "Driving too close to another car",
            "Monitoring network traffic",
            "Backing up data to the cloud",
        ),
        "A",
    ),
]

_HARD = [
    (
        "What is a zero-day vulnerability?",
        (
            "A bug fixed on the day it is found",
            "A vulnerability unknown to the vendor with no available patch",
            "A vulnerability that expires after one day",
            "A flaw in date calculations",
        ),
        "B",
    ),
    (
        "What does SQL injection exploit?",
        (
            "Weak Wi-Fi passwords",
            "Outdated operating systems",
            "Unsanitized user input inserted into database queries",
            "Physical access to servers",
        ),
        "C",
    ),
    (
        "What is the purpose of salting a password hash?",
        (
            "To make identical passwords produce different hashes and defeat precomputed tables",
            "To make the hash reversible",
            "To compress the password",
            "To encrypt the database",
        ),
        "A",
    ),
    (
        "What is a man-in-the-middle attack?",
        (
            "An attack launched from the middle of a network rack",
            "An insider selling data",
            "A denial of service attack",
            "An attacker secretly intercepting and possibly altering communication between two parties",
        ),
        "D",
    ),
    (
        "What is cross-site scripting (XSS)?",
        (
            "Sharing scripts between websites legally",
            "Injecting malicious scripts into web pages viewed by other users",
            "Running JavaScript on the server",
            "A method of compressing web pages",
        ),
        "B",
    ),
    (
        "What does a DDoS attack aim to do?",
        (
            "Steal credit card numbers",
            "Decrypt passwords",
            "Overwhelm a service with traffic to make it unavailable",
            "Install a keylogger",
        ),
        "C",
    ),
    (
        "What is the main benefit of end-to-end encryption?",
        (
            "Only the communicating users can read the messages",
            "Messages are delivered faster",
            "Messages cannot be deleted",
            "The service provider can scan messages for viruses",
        ),
        "A",
    ),
    (
        "What is credential stuffing?",
        (
            "Storing too many passwords in a browser",
            "Creating fake user accounts",
            "Brute forcing a single account",
            "Using leaked username and password pairs to log in to other services",
        ),
        "D",
    ),
    (
        "In security, what does the CIA triad stand for?",
        (
            "Central Intelligence Agency",
            "Confidentiality, Integrity, Availability",
            "Control, Inspection, Authentication",
            "Cryptography, Identity, Access",
        ),
        "B",
    ),
    (
        "What is a supply chain attack?",
        (
            "Compromising a trusted vendor or dependency to reach its customers",
            "Stealing physical shipments",
            "Attacking a company's delivery trucks",
            "Overloading an online store during a sale",
        ),
        "A",
    ),
    (
        "What is the purpose of a security information and event management (SIEM) system?",
        (
            "To replace antivirus software",
            "To manage employee schedules",
            "To aggregate and analyze security logs to detect incidents",
            "To encrypt files at rest",
        ),
        "C",
    ),
]


def _entries(items, difficulty):
    return [
        {
            "question": question,
            "option_a": options[0],
            "option_b": options[1],
            "option_c": options[2],
            "option_d": options[3],
            "correct_answer": correct,
            "difficulty": difficulty,
        }
        for question, options, correct in items
    ]


QUESTION_BANK = (
    _entries(_EASY, "easy") + _entries(_MEDIUM, "medium") + _entries(_HARD, "hard")
)
