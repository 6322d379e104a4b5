"""Application services: storage, uploads, auth, SMS and SEO."""
