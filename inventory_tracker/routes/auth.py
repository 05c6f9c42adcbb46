# inventory_tracker/routes/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_tracker.utils.hashing import get_password_hash, verify_password
from inventory_tracker.utils.tokenJWT import create_access_token, get_current_user
from inventory_tracker.utils.audit import write_log, client_ip
from inventory_tracker.utils.validation import trim
from inventory_tracker.models.users import User
from inventory_tracker.schemas import user as schemas
from inventory_tracker.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

REGISTER_FAILED = "An error occurred while creating the account. Please try again."


# Register a new staff account
@router.post("/register", response_model=schemas.UserResponse, status_code=201)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    username = trim(user.username)
    first_name = trim(user.first_name)
    last_name = trim(user.last_name)

    errors = {}
    for field, value in (("username", username), ("first_name", first_name), ("last_name", last_name)):
        if not value:
            errors[field] = ["This field is required."]
    if len(user.password.encode("utf-8")) > 72:
        errors["password"] = ["Password is too long."]
    if errors:
        raise HTTPException(status_code=400, detail={"message": "Invalid registration data", "errors": errors})

    # Check for existing user
    if db.query(User).filter(User.username == username).first():
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"username": username, "reason": "Username exists"})
        raise HTTPException(
            status_code=400,
            detail={"message": "Username already exists.", "errors": {"username": ["Username already exists."]}},
        )

    try:
        new_user = User(
            username=username,
            first_name=first_name,
            last_name=last_name,
            password_hash=get_password_hash(user.password),
        )
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Account creation failed for '{username}'")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=REGISTER_FAILED)

    # Log successful registration event
    write_log(db, user_id=new_user.id, action="REGISTER", resource="auth", status="SUCCESS",
              ip=client_ip(request), meta={"username": username})
    return new_user


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    username = trim(payload.username)
    db_user = db.query(User).filter(User.username == username).first()

    # Validate credentials and log failure on error
    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"username": username})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password.")

    access_token = create_access_token(data={"sub": db_user.username, "name": db_user.full_name})

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"username": db_user.username})

    return {"access_token": access_token, "token_type": "bearer"}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
