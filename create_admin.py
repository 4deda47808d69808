#!/usr/bin/env python3
"""
Script to create an admin user, or promote an existing user to admin.
Uses the database configured for the current FLASK_CONFIG.
"""

from getpass import getpass

from storefront import create_app
from storefront.extensions import db
from storefront.models import User


def create_admin_user(email, password, name, promote_existing=False):
    """
    Create an admin user.
    
    Args:
        email: Admin email address
        password: Admin password (will be hashed)
        name: Admin full name
        promote_existing: Update the role of an existing user instead of failing
    
    Returns:
        The admin User.
    """
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is not None:
        if not promote_existing:
            raise ValueError(f'User with email {email} already exists (role: {user.role})')
        user.role = 'admin'
        db.session.commit()
        print(f"✅ User {email} updated to admin role!")
        return user
    
    user = User(email=email, name=name, role='admin')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    print(f"✅ Admin user created successfully!")
    print(f"   Email: {email}")
    print(f"   Name: {name}")
    print(f"   Role: admin")
    return user


def main():
    print("=" * 60)
    print("Storefront - Admin User Creation")
    print("=" * 60)
    print()
    
    app = create_app()
    with app.app_context():
        db.create_all()
        
        print("Enter admin user details:")
        email = input("Email: ").strip().lower()
        existing = User.query.filter_by(email=email).first()
        if existing is not None:
            print(f"❌ User with email {email} already exists!")
            print(f"   Current role: {existing.role}")
            update = input("Do you want to update this user to admin role? (yes/no): ").lower()
            if update == 'yes':
                create_admin_user(email, None, existing.name, promote_existing=True)
            return
        
        password = getpass("Password: ").strip()
        name = input("Full Name: ").strip()
        
        confirm = input("Proceed? (yes/no): ").lower()
        if confirm == 'yes':
            create_admin_user(email, password, name)
        else:
            print("❌ Admin creation cancelled.")


if __name__ == '__main__':
    main()
