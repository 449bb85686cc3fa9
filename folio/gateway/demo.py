"""Sample content served when a request resolves to no tenant."""

import copy
from typing import Any

DEMO_PROJECTS = (
    {
        "id": 1,
        "title": "E-Commerce Platform",
        "description": "A full-stack e-commerce solution with modern UI/UX",
        "category": "Web Development",
        "overview": (
            "Built a comprehensive e-commerce platform with React frontend and Node.js backend, "
            "featuring user authentication, payment processing, and admin dashboard."
        ),
        "technologies": ["React", "Node.js", "MongoDB", "Stripe"],
        "features": [
            "User authentication and authorization",
            "Product catalog with search and filtering",
            "Shopping cart and checkout process",
            "Payment integration with Stripe",
            "Admin dashboard for inventory management",
            "Responsive design for mobile devices",
        ],
        "live_url": "https://example-ecommerce.com",
        "github_url": "https://github.com/username/ecommerce-platform",
        "status": "published",
        "views": 1250,
        "project_images": [
            {"id": 1, "url": "/images/hero-bg.png", "caption": "E-Commerce Platform Preview"}
        ],
        "created_at": "2024-01-15T10:00:00Z",
    },
    {
        "id": 2,
        "title": "AI-Powered Chatbot",
        "description": "Intelligent chatbot using machine learning",
        "category": "AI/ML",
        "overview": (
            "Developed an AI-powered chatbot using natural language processing and machine "
            "learning algorithms for customer support automation."
        ),
        "technologies": ["Python", "TensorFlow", "NLP", "FastAPI"],
        "features": [
            "Natural language understanding",
            "Context-aware conversations",
            "Multi-language support",
            "Integration with CRM systems",
            "Analytics and reporting dashboard",
            "Continuous learning capabilities",
        ],
        "live_url": "https://ai-chatbot-demo.com",
        "github_url": "https://github.com/username/ai-chatbot",
        "status": "published",
        "views": 890,
        "project_images": [{"id": 2, "url": "/images/hero-bg.png", "caption": "AI Chatbot Preview"}],
        "created_at": "2024-02-20T14:30:00Z",
    },
    {
        "id": 3,
        "title": "Mobile Banking App",
        "description": "Secure mobile banking application",
        "category": "Mobile Development",
        "overview": (
            "Created a secure mobile banking application with biometric authentication, "
            "real-time transactions, and comprehensive financial management features."
        ),
        "technologies": ["React Native", "Firebase", "Biometrics", "Redux"],
        "features": [
            "Biometric authentication (fingerprint/face ID)",
            "Real-time transaction monitoring",
            "Bill payments and transfers",
            "Investment portfolio tracking",
            "Push notifications for alerts",
            "Offline transaction queuing",
        ],
        "live_url": "https://mobile-banking-app.com",
        "github_url": "https://github.com/username/mobile-banking",
        "status": "published",
        "views": 2100,
        "project_images": [
            {"id": 3, "url": "/images/hero-bg.png", "caption": "Mobile Banking App Preview"}
        ],
        "created_at": "2024-03-10T09:15:00Z",
    },
)

DEMO_CATEGORIES = (
    {"id": 1, "name": "Web Development", "description": "Full-stack web applications", "color": "#8B4513"},
    {"id": 2, "name": "AI/ML", "description": "Artificial Intelligence and Machine Learning", "color": "#FF6B35"},
    {"id": 3, "name": "Mobile Development", "description": "Mobile applications for iOS and Android", "color": "#4ECDC4"},
    {"id": 4, "name": "Cloud Computing", "description": "Cloud infrastructure and services", "color": "#45B7D1"},
    {"id": 5, "name": "Blockchain", "description": "Blockchain and cryptocurrency projects", "color": "#96CEB4"},
    {"id": 6, "name": "Cybersecurity", "description": "Security and privacy solutions", "color": "#FFEAA7"},
)

DEMO_NICHES = (
    {
        "id": 1,
        "title": "E-Commerce Solutions",
        "overview": "Comprehensive e-commerce platforms with modern UI/UX and secure payment processing",
        "tools": "React, Node.js, Stripe, MongoDB",
        "key_features": "User authentication\nShopping cart\nPayment processing\nAdmin dashboard\nInventory management",
        "image": "e-commerce.jpeg",
        "sort_order": 1,
        "ai_driven": False,
    },
    {
        "id": 2,
        "title": "AI-Powered Analytics",
        "overview": "Intelligent analytics platforms using machine learning for business insights",
        "tools": "Python, TensorFlow, FastAPI, PostgreSQL",
        "key_features": "Data visualization\nPredictive analytics\nReal-time monitoring\nCustom dashboards\nAutomated reporting",
        "image": "ai-analytics.jpeg",
        "sort_order": 2,
        "ai_driven": True,
    },
    {
        "id": 3,
        "title": "Mobile Banking Apps",
        "overview": "Secure mobile banking applications with biometric authentication",
        "tools": "React Native, Firebase, Biometrics, Redux",
        "key_features": "Biometric authentication\nReal-time transactions\nBill payments\nInvestment tracking\nPush notifications",
        "image": "mobile-banking.jpeg",
        "sort_order": 3,
        "ai_driven": False,
    },
    {
        "id": 4,
        "title": "Cloud Infrastructure",
        "overview": "Scalable cloud infrastructure solutions for modern applications",
        "tools": "AWS, Docker, Kubernetes, Terraform",
        "key_features": "Auto-scaling\nLoad balancing\nMonitoring\nSecurity compliance\nCost optimization",
        "image": "cloud-infrastructure.jpeg",
        "sort_order": 4,
        "ai_driven": False,
    },
)


def _skills(start: int, *pairs: tuple[str, int]) -> list[dict]:
    return [{"id": start + i, "name": name, "level": level} for i, (name, level) in enumerate(pairs)]


DEMO_TECHNOLOGIES = (
    {
        "id": 1,
        "title": "Web Development",
        "type": "domain",
        "icon": "Code",
        "sort_order": 1,
        "tech_skills": _skills(
            1, ("React", 90), ("Node.js", 85), ("TypeScript", 80), ("MongoDB", 75), ("PostgreSQL", 70)
        ),
    },
    {
        "id": 2,
        "title": "Mobile Development",
        "type": "domain",
        "icon": "Smartphone",
        "sort_order": 2,
        "tech_skills": _skills(
            6, ("React Native", 85), ("Flutter", 75), ("iOS Development", 70), ("Android Development", 65)
        ),
    },
    {
        "id": 3,
        "title": "AI/ML",
        "type": "domain",
        "icon": "Cpu",
        "sort_order": 3,
        "tech_skills": _skills(
            10, ("Python", 90), ("TensorFlow", 80), ("PyTorch", 75), ("NLP", 70), ("Computer Vision", 65)
        ),
    },
    {
        "id": 4,
        "title": "Cloud Computing",
        "type": "domain",
        "icon": "Cloud",
        "sort_order": 4,
        "tech_skills": _skills(
            15, ("AWS", 85), ("Docker", 80), ("Kubernetes", 75), ("Azure", 70), ("Google Cloud", 65)
        ),
    },
)

DEMO_SETTINGS = {
    "banner_name": "Muneeb Arif",
    "banner_title": "Full Stack Developer",
    "banner_tagline": "Building modern web applications with passion and precision",
    "theme_name": "sand",
    "avatar_image": "/images/profile/avatar.jpeg",
    "hero_image": "/images/hero-bg.png",
    "section_hero_visible": True,
    "section_portfolio_visible": True,
    "section_technologies_visible": True,
    "section_domains_visible": True,
    "section_project_cycle_visible": True,
    "section_prompts_visible": False,
    "show_resume_download": True,
    "show_view_work_button": True,
    "custom_button_title": "",
    "custom_button_link": "",
    "custom_button_target": "_self",
    "logo_type": "initials",
    "site_url": "https://my-portfolio-apis.vercel.app",
}

_DEMO = {
    "projects": DEMO_PROJECTS,
    "categories": DEMO_CATEGORIES,
    "niches": DEMO_NICHES,
    "technologies": DEMO_TECHNOLOGIES,
    "settings": DEMO_SETTINGS,
}


def demo_payload(entity: str) -> Any:
    """Fresh copy of the demo data for ``entity``; entities without demo data get []."""
    data = _DEMO.get(entity)
    if data is None:
        return []
    if isinstance(data, tuple):
        return [copy.deepcopy(item) for item in data]
    return copy.deepcopy(data)
