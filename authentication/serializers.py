from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, StudentProfile, GuideProfile


class UserSerializer(serializers.ModelSerializer):
    profile = serializers.SerializerMethodField()
    profile_picture = serializers.ImageField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name',
            'role', 'phone', 'profile_picture', 'is_active', 'created_at',
            'profile',
        ]
        read_only_fields = ['id', 'role', 'created_at']

    def get_profile(self, obj):
        """Return role-specific details if the user has a profile."""
        if obj.role == 'student' and hasattr(obj, 'student_profile'):
            profile = obj.student_profile
            return {
                'enrollment_number': profile.enrollment_number,
                'department': profile.department,
                'semester': profile.semester,
            }
        if obj.role == 'guide' and hasattr(obj, 'guide_profile'):
            profile = obj.guide_profile
            return {
                'designation': profile.designation,
                'department': profile.department,
            }
        return None


class AccountCreateSerializer(serializers.ModelSerializer):
    """Used by admins to create guide and student accounts."""
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    department = serializers.CharField(write_only=True, required=False, allow_blank=True)
    designation = serializers.CharField(write_only=True, required=False, allow_blank=True)
    enrollment_number = serializers.CharField(write_only=True, required=False, allow_blank=True)

    class Meta:
        model = User
        fields = [
            'username', 'email', 'first_name', 'last_name', 'phone', 'password',
            'department', 'designation', 'enrollment_number',
        ]

    def validate(self, attrs):
        if attrs.get('email') and User.objects.filter(email=attrs['email']).exists():
            raise serializers.ValidationError({"email": "This email is already registered."})
        return attrs

    def create(self, validated_data):
        role = self.context['role']
        department = validated_data.pop('department', None)
        designation = validated_data.pop('designation', None)
        enrollment_number = validated_data.pop('enrollment_number', None) or None
        password = validated_data.pop('password')

        user = User.objects.create_user(password=password, role=role, **validated_data)

        if role == 'guide':
            GuideProfile.objects.create(user=user, department=department, designation=designation)
        elif role == 'student':
            StudentProfile.objects.create(
                user=user,
                department=department,
                enrollment_number=enrollment_number,
            )
        return user
