import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the AriaTech store.
    Deployments provide Supabase credentials and admin login via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    BRAND_NAME = os.getenv('BRAND_NAME', 'AriaTech')

    # Supabase project - the service key wins when both are present
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY')
    SUPABASE_SERVICE_KEY = os.getenv('SUPABASE_SERVICE_KEY')
    SUPABASE_TIMEOUT = float(os.getenv('SUPABASE_TIMEOUT', '10'))

    # Table names
    PRODUCTS_TABLE = os.getenv('PRODUCTS_TABLE', 'products')
    SLIDER_TABLE = os.getenv('SLIDER_TABLE', 'slider_images')

    # Uploads: "supabase" stores in a bucket, "local" in the static folder
    STORAGE_TYPE = os.getenv('STORAGE_TYPE', 'supabase')
    STORAGE_BUCKET = os.getenv('STORAGE_BUCKET', 'product-images')
    MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', str(2 * 1024 * 1024)))

    # Admin login (single fixed account)
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')
    ADMIN_SESSION_MAX_AGE = int(os.getenv('ADMIN_SESSION_MAX_AGE', str(24 * 60 * 60)))

    # Port for local server
    PORT = int(os.getenv('PORT', '3000'))

    @classmethod
    def as_dict(cls):
        """Upper-case settings as a plain dict, ready for app.config.update()"""
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}
