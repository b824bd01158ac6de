"""
Recommendation text for each SEO score factor.
"""

from config import SCORING

FALLBACK = "No specific recommendation available."

RECOMMENDATIONS = {
    "metaTitle": {
        "low": "Your title tag needs improvement. Aim for 50-60 characters and include your primary keyword.",
        "medium": "Your title is acceptable but could be improved. Ensure it's compelling and includes your primary keyword.",
        "high": "Great job! Your title tag is well-optimized.",
    },
    "metaDescription": {
        "low": "Your meta description needs improvement. Aim for 150-160 characters and include your primary keyword.",
        "medium": "Your meta description is acceptable but could be more compelling. Include a call-to-action.",
        "high": "Excellent! Your meta description is well-optimized.",
    },
    "headings": {
        "low": "Your heading structure needs improvement. Use one H1 tag and create a logical heading hierarchy.",
        "medium": "Your heading structure is acceptable but could be improved. Ensure a logical hierarchy and include keywords in important headings.",
        "high": "Great job! Your heading structure is well-organized.",
    },
    "contentQuality": {
        "low": "Your content needs substantial improvement. Aim for at least 300 words of high-quality, original content.",
        "medium": "Your content is acceptable but could be improved. Add more detail and ensure it provides value to readers.",
        "high": "Excellent! Your content is comprehensive and valuable.",
    },
    "keywordDensity": {
        "low": "Your keyword density is either too low or too high. Aim for 1-3% keyword density for optimal results.",
        "medium": "Your keyword density is acceptable but could be improved. Ensure keywords appear naturally throughout the content.",
        "high": "Great job! Your keyword density is optimal.",
    },
    "internalLinks": {
        "low": "Your page has too few internal links. Add more to improve navigation and distribute page authority.",
        "medium": "Your internal linking is acceptable but could be improved. Use descriptive anchor text and link to relevant pages.",
        "high": "Excellent! Your internal linking structure is well-implemented.",
    },
    "externalLinks": {
        "low": "Consider adding more high-quality external links to authoritative sources to improve credibility.",
        "medium": "Your external links are acceptable but ensure they all point to high-quality, relevant sources.",
        "high": "Great job! Your external links add value to your content.",
    },
    "imagesAlt": {
        "low": "Many of your images are missing alt text. Add descriptive alt text that includes keywords when appropriate.",
        "medium": "Some images have good alt text, but others need improvement. Ensure all images have descriptive alt attributes.",
        "high": "Excellent! Your images have descriptive alt text.",
    },
    "pageSpeed": {
        "low": "Your page speed needs significant improvement. Optimize images, enable compression, and minimize code.",
        "medium": "Your page speed is acceptable but could be improved. Look for specific opportunities to optimize.",
        "high": "Great job! Your page loads quickly, which benefits both users and SEO.",
    },
    "mobileCompatibility": {
        "low": "Your page is not mobile-friendly. Implement responsive design to improve mobile user experience.",
        "medium": "Your page is somewhat mobile-friendly but has issues. Address specific mobile usability problems.",
        "high": "Excellent! Your page is fully mobile-compatible.",
    },
    "security": {
        "low": "Your page is not secure. Implement HTTPS to protect user data and improve SEO.",
        "medium": "Your security is acceptable but could be improved. Ensure all resources load over HTTPS.",
        "high": "Great job! Your page is properly secured with HTTPS.",
    },
    "socialMetadata": {
        "low": "Your page is missing important social media metadata. Add Open Graph and Twitter Card tags.",
        "medium": "Your social metadata is present but could be improved. Ensure all required properties are included.",
        "high": "Excellent! Your social media metadata is well-implemented.",
    },
}


def recommendation_bucket(score) -> str:
    buckets = SCORING["recommendation_buckets"]
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return "low"
    if score >= buckets["high"]:
        return "high"
    if score >= buckets["medium"]:
        return "medium"
    return "low"


def generate_recommendation(factor: str, score) -> str:
    texts = RECOMMENDATIONS.get(factor) if isinstance(factor, str) else None
    if not texts:
        return FALLBACK
    return texts.get(recommendation_bucket(score), FALLBACK)
