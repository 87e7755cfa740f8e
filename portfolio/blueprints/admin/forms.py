from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import StringField, TextAreaField, SelectField, BooleanField, IntegerField, SubmitField
from wtforms.validators import DataRequired, Length, Optional, NumberRange

from portfolio.models.contact import CONTACT_STATUSES
from portfolio.models.content import CATEGORY_2D, CATEGORY_3D
from portfolio.services.upload_service import UPLOAD_FOLDERS
from portfolio.utils.forms import TagListField


class BlogPostForm(FlaskForm):
    """博客文章表单 (新建 / 编辑)"""
    title = StringField('Title', validators=[DataRequired(message='Title and content are required'), Length(max=200)])
    slug = StringField('Slug', validators=[Optional(), Length(max=200)])
    excerpt = TextAreaField('Excerpt', validators=[Optional(), Length(max=500)])
    # content 存储 Markdown 文本
    content = TextAreaField('Content', validators=[DataRequired(message='Title and content are required')])
    category = StringField('Category', validators=[Optional(), Length(max=64)])
    tags = TagListField('Tags', default=list)
    featured_image = StringField('Featured image', validators=[Optional(), Length(max=1024)])
    featured = BooleanField('Featured')
    published = BooleanField('Publish now')
    submit = SubmitField('Save')


class ArtworkForm(FlaskForm):
    """2D / 3D 作品表单"""
    title = StringField('Title', validators=[DataRequired(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional()])
    image_url = StringField('Image', validators=[DataRequired(), Length(max=1024)])
    category = SelectField('Category', choices=[
        (CATEGORY_2D, '2D Art'),
        (CATEGORY_3D, '3D Model'),
    ], default=CATEGORY_2D)
    subcategory = StringField('Subcategory', validators=[DataRequired(), Length(max=64)])
    year = IntegerField('Year', validators=[Optional(), NumberRange(min=1900, max=2100)])
    medium = StringField('Medium', validators=[Optional(), Length(max=128)])
    dimensions = StringField('Dimensions', validators=[Optional(), Length(max=64)])
    sketchfab_id = StringField('Sketchfab model ID', validators=[Optional(), Length(max=64)])
    tags = TagListField('Tags', default=list)
    featured = BooleanField('Featured')
    submit = SubmitField('Save Artwork')


class PhotoForm(FlaskForm):
    """摄影作品表单 (分类固定为 photography)"""
    title = StringField('Title', validators=[DataRequired(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional()])
    image_url = StringField('Image', validators=[DataRequired(), Length(max=1024)])
    subcategory = StringField('Category', validators=[DataRequired(), Length(max=64)])
    camera = StringField('Camera', validators=[Optional(), Length(max=128)])
    settings = StringField('Settings', validators=[Optional(), Length(max=128)])
    location = StringField('Location', validators=[Optional(), Length(max=128)])
    year = IntegerField('Year', validators=[Optional(), NumberRange(min=1900, max=2100)])
    tags = TagListField('Tags', default=list)
    featured = BooleanField('Featured')
    submit = SubmitField('Save Photo')


class StatusForm(FlaskForm):
    """联系记录状态"""
    status = SelectField('Status', choices=[(s, s.title()) for s in CONTACT_STATUSES])
    submit = SubmitField('Update')


class UploadForm(FlaskForm):
    """图片上传表单"""
    file = FileField('Image', validators=[FileRequired(message='No file selected')])
    folder = SelectField('Folder', choices=[(f, f) for f in UPLOAD_FOLDERS], default='artwork')
    submit = SubmitField('Upload')
