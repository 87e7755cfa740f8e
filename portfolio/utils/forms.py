"""
表单辅助
Flask-WTF 会自动读取 request.form / request.files，JSON 请求体同样被包装为表单数据
"""
from flask import request
from wtforms import Field
from wtforms.widgets import TextInput

from portfolio.exceptions import ValidationError
from portfolio.utils.text import normalize_tags


class TagListField(Field):
    """标签字段：接受多值或逗号分隔字符串，得到去重后的标签列表"""
    widget = TextInput()

    def _value(self):
        return ', '.join(self.data or [])

    def process_formdata(self, valuelist):
        parts = []
        for value in valuelist:
            if isinstance(value, (list, tuple)):
                parts.extend(value)
            else:
                parts.extend(str(value).split(','))
        self.data = normalize_tags(parts)


def validate_form(form):
    """校验表单，失败时抛出 ValidationError (附带逐字段错误)"""
    if form.validate_on_submit():
        return form
    errors = {name: msgs for name, msgs in form.errors.items()}
    if errors:
        name, messages = next(iter(errors.items()))
        message = f'{form[name].label.text}: {messages[0]}' if name in form else messages[0]
    else:
        message = 'Invalid form submission'
    raise ValidationError(message, payload={'errors': errors})


def submitted_fields():
    """本次请求实际提交的字段名 (用于局部更新)"""
    if request.is_json:
        return set((request.get_json(silent=True) or {}).keys())
    return set(request.form.keys()) | set(request.files.keys())


def form_payload(form, exclude=('submit', 'csrf_token'), only=None):
    """表单数据 -> 后端写入字典；空字符串视为未填写"""
    data = {}
    for name, value in form.data.items():
        if name in exclude:
            continue
        if only is not None and name not in only:
            continue
        data[name] = None if value == '' else value
    return data
