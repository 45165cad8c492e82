"""
Run the store with Flask's development server:

    python -m ariatech
"""

from . import create_app

app = create_app()

if __name__ == '__main__':
    port = app.config['PORT']
    print("\n" + "=" * 60)
    print(f"{app.config['BRAND_NAME']} store")
    print("=" * 60)
    print(f"Storefront:      http://localhost:{port}")
    print(f"Admin Login:     http://localhost:{port}/admin/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=port, debug=True)
