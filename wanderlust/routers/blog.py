"""Travel blog."""
from fastapi import APIRouter, Depends, HTTPException, Request

from wanderlust.dependencies import get_api
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient
from wanderlust.templating import render

router = APIRouter(tags=["blog"])


@router.get("/blog")
def blog_index(request: Request, api: ApiClient = Depends(get_api)):
    posts = resources.list_or_empty(resources.blogs, api)
    categories = sorted({p.category for p in posts if p.category})
    return render(request, "blog/list.html", posts=posts, categories=categories, recent=posts[:3])


@router.get("/blog/{post_id}")
def blog_post(request: Request, post_id: str, api: ApiClient = Depends(get_api)):
    post = resources.get_or_none(resources.blogs, api, post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return render(request, "blog/post.html", post=post)
