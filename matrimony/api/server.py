from fastapi import FastAPI, HTTPException, Depends, File, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import List, Optional
from matrimony.models import *
from matrimony.api.schemas import *
from matrimony.core.config import *
from sqlalchemy.orm import Session
from matrimony.core.errors import Forbidden, ServiceError
from matrimony.services.auth_service import AuthService
from matrimony.services.interest_service import InterestService, InterestView
from matrimony.services.message_service import MessageService
from matrimony.services.profile_service import ProfileService
from matrimony.services.user_service import UserService
import logging

logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Matrimony API",
    description="Profiles, interests, matches and messaging for a matrimonial matchmaking site",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

bearer_scheme = HTTPBearer(auto_error=False)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
    return JSONResponse(status_code=400, content={"message": error["msg"], "field": field})


def get_db():
    from matrimony.models.database import Session as DB_Session
    session = DB_Session()
    try:
        yield session
    finally:
        session.close()

def get_profile_service():
    return ProfileService()

def get_message_service():
    return MessageService()

def get_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> Optional[str]:
    return credentials.credentials if credentials else None

def get_current_user(token: Optional[str] = Depends(get_token), db: Session = Depends(get_db)) -> User:
    return AuthService.authenticate(db, token)

def get_optional_user(token: Optional[str] = Depends(get_token), db: Session = Depends(get_db)) -> Optional[User]:
    return AuthService.authenticate(db, token) if token else None

def get_admin_user(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise Forbidden("Administrator access required")
    return user


@app.get("/", tags=["Health"])
async def root():
    return {"message": "Matrimony API is running", "version": "1.0.0"}

@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy", "service": "matrimony-api"}


@app.post("/api/register", response_model=AuthResponse, status_code=201, tags=["Auth"])
def register(credentials: Credentials, db: Session = Depends(get_db)):
    try:
        user, token = AuthService.register(db, credentials.username, credentials.password)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error registering user: {e}")
        raise HTTPException(status_code=500, detail=f"Registration failed: {str(e)}")

@app.post("/api/login", response_model=AuthResponse, tags=["Auth"])
def login(credentials: Credentials, db: Session = Depends(get_db)):
    user, token = AuthService.login(db, credentials.username, credentials.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)

@app.post("/api/logout", tags=["Auth"])
def logout(token: Optional[str] = Depends(get_token), user: User = Depends(get_current_user),
           db: Session = Depends(get_db)):
    AuthService.logout(db, token)
    return {"message": "Logged out"}

@app.get("/api/user", response_model=UserResponse, tags=["Auth"])
def get_me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)


@app.post("/api/profiles", response_model=ProfileResponse, status_code=201, tags=["Profiles"])
def create_profile(profile_data: ProfileCreate, user: User = Depends(get_current_user),
                   db: Session = Depends(get_db), profile_service: ProfileService = Depends(get_profile_service)):
    try:
        profile = profile_service.create_profile(db, user.id, profile_data.model_dump())
        return ProfileResponse.model_validate(profile)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error creating profile: {e}")
        raise HTTPException(status_code=500, detail=f"Profile creation failed: {str(e)}")

@app.get("/api/profiles", response_model=List[ProfileResponse], tags=["Profiles"])
def list_profiles(age_min: Optional[int] = Query(None, alias="ageMin"),
                  age_max: Optional[int] = Query(None, alias="ageMax"),
                  religion: Optional[str] = None, city: Optional[str] = None, gender: Optional[str] = None,
                  user: Optional[User] = Depends(get_optional_user),
                  db: Session = Depends(get_db), profile_service: ProfileService = Depends(get_profile_service)):
    profiles = profile_service.list_profiles(db, {
        "age_min": age_min,
        "age_max": age_max,
        "religion": religion,
        "city": city,
        "gender": gender,
        "exclude_user_id": user.id if user else None,
    })
    return [ProfileResponse.model_validate(profile) for profile in profiles]

@app.get("/api/profiles/{profile_id}", response_model=ProfileResponse, tags=["Profiles"])
def get_profile(profile_id: int, db: Session = Depends(get_db),
                profile_service: ProfileService = Depends(get_profile_service)):
    return ProfileResponse.model_validate(profile_service.get_profile_data(db, profile_id))

@app.get("/api/my-profile", response_model=ProfileResponse, tags=["Profiles"])
def get_my_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db),
                   profile_service: ProfileService = Depends(get_profile_service)):
    return ProfileResponse.model_validate(profile_service.get_profile_by_user_id(db, user.id))

@app.patch("/api/my-profile", response_model=ProfileResponse, tags=["Profiles"])
def update_my_profile(profile_data: ProfileUpdate, user: User = Depends(get_current_user),
                      db: Session = Depends(get_db), profile_service: ProfileService = Depends(get_profile_service)):
    try:
        profile = profile_service.update_profile(db, user.id, profile_data.model_dump(exclude_unset=True))
        return ProfileResponse.model_validate(profile)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error updating profile: {e}")
        raise HTTPException(status_code=500, detail=f"Profile update failed: {str(e)}")

@app.post("/api/my-profile/photo", response_model=ProfileResponse, tags=["Profiles"])
async def upload_photo(photo: UploadFile = File(...), user: User = Depends(get_current_user),
                       db: Session = Depends(get_db), profile_service: ProfileService = Depends(get_profile_service)):
    try:
        data = await photo.read()
        profile = profile_service.set_photo(db, user.id, data, photo.content_type)
        return ProfileResponse.model_validate(profile)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error uploading photo: {e}")
        raise HTTPException(status_code=500, detail=f"Photo upload failed: {str(e)}")


@app.post("/api/interests", response_model=InterestResponse, status_code=201, tags=["Interests"])
def send_interest(interest_data: InterestCreate, user: User = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    interest = InterestService.send_interest(db, user.id, interest_data.receiver_id)
    return InterestResponse.model_validate(interest)

@app.get("/api/interests", response_model=List[InterestWithProfile], tags=["Interests"])
def list_interests(type: InterestView = InterestView.RECEIVED, user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    rows = InterestService.list_interests(db, user.id, type)
    return [
        InterestWithProfile(
            interest=InterestResponse.model_validate(interest),
            profile=ProfileResponse.model_validate(profile)
        )
        for interest, profile in rows
    ]

@app.patch("/api/interests/{interest_id}", response_model=InterestResponse, tags=["Interests"])
def resolve_interest(interest_id: int, update: InterestUpdate, user: User = Depends(get_current_user),
                     db: Session = Depends(get_db)):
    interest = InterestService.resolve_interest(db, interest_id, user.id, update.status)
    return InterestResponse.model_validate(interest)

@app.delete("/api/matches/{interest_id}", response_model=InterestResponse, tags=["Interests"])
def remove_match(interest_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    interest = InterestService.remove_match(db, interest_id, user.id)
    return InterestResponse.model_validate(interest)


@app.post("/api/messages", response_model=MessageResponse, status_code=201, tags=["Messages"])
def send_message(message_data: MessageCreate, user: User = Depends(get_current_user),
                 db: Session = Depends(get_db), message_service: MessageService = Depends(get_message_service)):
    message = message_service.send_message(db, user.id, message_data.receiver_id, message_data.content)
    return MessageResponse.model_validate(message)

@app.get("/api/messages/{user_id}", response_model=List[MessageResponse], tags=["Messages"])
def list_messages(user_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    UserService.get_user(db, user_id)
    messages = MessageService.list_messages(db, user.id, user_id)
    return [MessageResponse.model_validate(message) for message in messages]

@app.get("/api/conversations", response_model=List[ProfileResponse], tags=["Messages"])
def list_conversations(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    profiles = MessageService.list_conversations(db, user.id)
    return [ProfileResponse.model_validate(profile) for profile in profiles]


@app.get("/api/admin/users", response_model=List[AdminUserEntry], tags=["Admin"])
def admin_list_users(admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    return [
        AdminUserEntry(
            user=UserResponse.model_validate(entry["user"]),
            profile=ProfileResponse.model_validate(entry["profile"]) if entry["profile"] else None
        )
        for entry in UserService.list_users_with_profiles(db)
    ]

@app.get("/api/stats", response_model=StatsResponse, tags=["Admin"])
def get_system_stats(admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    try:
        return UserService.get_stats(db)
    except Exception as e:
        logger.error(f"Error getting stats: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load statistics: {str(e)}")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("API server shutting down")
