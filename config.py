"""
Configuration for the SEO Toolkit scoring engine and local store.
"""

SCORING = {
    "weights": {
        "metaTitle": 0.10,
        "metaDescription": 0.10,
        "headings": 0.08,
        "contentQuality": 0.12,
        "keywordDensity": 0.10,
        "internalLinks": 0.08,
        "externalLinks": 0.05,
        "imagesAlt": 0.05,
        "pageSpeed": 0.10,
        "mobileCompatibility": 0.08,
        "security": 0.07,
        "socialMetadata": 0.07,
    },
    "title": {
        "ideal_min": 50,
        "ideal_max": 60,
        "acceptable_min": 40,
        "acceptable_max": 70,
    },
    "description": {
        "ideal_min": 150,
        "ideal_max": 160,
        "acceptable_min": 120,
        "acceptable_max": 170,
    },
    "length_points": {
        "ideal": 100,
        "acceptable": 70,
        "present": 40,
    },
    "content": {
        "min_words": 300,
        "min_paragraphs": 3,
        "short_sentence_max": 10,
        "long_sentence_min": 15,
    },
    "keyword_density": {
        "target_min": 1,
        "target_max": 3,
        "over_max": 5,
    },
    "readability": {
        "easy_min": 80,
        "moderate_min": 60,
    },
    # Three independent threshold sets for the same 0-100 score.
    "category_thresholds": {
        "excellent": 85,
        "good": 70,
        "average": 50,
        "poor": 30,
    },
    "class_thresholds": {
        "score-high": 70,
        "score-medium": 50,
    },
    "level_thresholds": [
        (80, "Excellent", "green"),
        (70, "Good", "green"),
        (50, "Average", "yellow"),
        (30, "Poor", "red"),
    ],
    "recommendation_buckets": {
        "high": 70,
        "medium": 50,
    },
}

STORAGE = {
    "keys": {
        "projects": "seo-toolkit-projects",
        "recent_analyses": "seo-toolkit-recent-analyses",
        "saved_keywords": "seo-toolkit-saved-keywords",
        "saved_content": "seo-toolkit-saved-content",
        "competitor_analyses": "seo-toolkit-competitor-analyses",
        "settings": "seo-toolkit-settings",
        "credentials": "seo-toolkit-credentials",
        "api_endpoints": "seo-toolkit-api-endpoints",
    },
    "max_recent_analyses": 10,
    "default_path": "seo-toolkit-storage.json",
}

DEFAULTS = {
    "settings": {
        "language": "en",
        "country": "US",
        "defaultKeywordLocation": "2840",  # United States
        "theme": "light",
    },
    "credentials": {
        "dataForSeo": {
            "username": "",
            "password": "",
        },
        "anthropic": {
            "apiKey": "",
            "model": "claude-sonnet-4-5-20250929",
            "baseUrl": "https://api.anthropic.com",
        },
    },
    "api_endpoints": {
        "dataForSeo": {
            "baseUrl": "https://api.dataforseo.com/v3",
            "serpEndpoint": "/serp",
            "onPageEndpoint": "/on_page",
            "contentAnalysisEndpoint": "/content_analysis",
            "keywordDataEndpoint": "/keywords_data",
        },
    },
}

LLM = {
    "env_api_key": "ANTHROPIC_API_KEY",
    "env_model": "ANTHROPIC_MODEL",
    "env_base_url": "ANTHROPIC_BASE_URL",
    "default_model": "claude-sonnet-4-5-20250929",
    "max_tokens": {
        "suggestions": 800,
        "meta_description": 200,
        "keyword_difficulty": 500,
        "content_brief": 1000,
    },
    "temperature": 0.7,
}

LLM_MODELS = [
    {"id": "claude-opus-4-1-20250805", "name": "Claude Opus 4.1", "description": "Most capable model for complex analysis"},
    {"id": "claude-sonnet-4-5-20250929", "name": "Claude Sonnet 4.5", "description": "Best balance of capability and cost"},
    {"id": "claude-3-5-haiku-20241022", "name": "Claude Haiku 3.5", "description": "Fastest model for short rewrites"},
]
